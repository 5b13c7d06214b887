from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Optional

RelationshipType = Literal["family", "friend", "couple", "conflict"]

CONFIRMED = "confirmed"

# --- Input models ---

class Attendee(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str = "Guest"
    rsvp_status: str = CONFIRMED
    category: str = "other"  # family / friend / colleague / other
    dietary_restrictions: Optional[str] = None

    @property
    def is_eligible(self) -> bool:
        return self.rsvp_status == CONFIRMED

    @property
    def has_dietary_restriction(self) -> bool:
        return bool(self.dietary_restrictions)

class Table(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str = "Table"
    capacity: int = Field(gt=0)
    shape: str = "round"  # cosmetic, not used in scoring

class Seat(BaseModel):
    id: str
    table_id: str
    attendee_id: Optional[str] = None

class Relationship(BaseModel):
    model_config = ConfigDict(frozen=True)

    guest_id: str
    related_guest_id: str
    relationship_type: RelationshipType
    strength: int = Field(ge=1, le=10)  # for conflict: severity

class OptimizationOptions(BaseModel):
    prioritize_families: bool = True
    avoid_conflicts: bool = True
    balance_tables: bool = True
    respect_dietary_restrictions: bool = True
    keep_couples_and_families_together: bool = True

class SolveRequest(BaseModel):
    attendees: List[Attendee]
    tables: List[Table]
    relationships: List[Relationship] = []
    seats: Optional[List[Seat]] = None
    options: OptimizationOptions = OptimizationOptions()

# --- Output models ---

class SeatAssignment(BaseModel):
    model_config = ConfigDict(frozen=True)

    attendee_id: str
    table_id: str
    seat_id: str

class OptimizationResult(BaseModel):
    success: bool
    message: str
    assignments: List[SeatAssignment] = []
    score: float = 0.0
    unplaced: List[str] = []
    error_type: Optional[str] = None  # error class name on failure
