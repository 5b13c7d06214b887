import logging
from dataclasses import dataclass, field
from functools import cached_property
from typing import Dict, FrozenSet, List, Mapping, Optional, Tuple

from seatplan.models import Attendee, OptimizationOptions, Relationship, SeatAssignment, Seat, Table
from seatplan.solver.affinity import candidate_tables, placement_score
from seatplan.solver.capacity import CapacityTracker
from seatplan.solver.graph import RelationshipGraph

logger = logging.getLogger(__name__)

# Fixed threshold, not derived from data: only strong family ties are paired in phase 1.
FAMILY_PAIRING_MIN_STRENGTH = 8


@dataclass(frozen=True)
class PlacementState:
    """Immutable accumulator threaded through both phases."""

    assignments: Tuple[SeatAssignment, ...] = ()
    placed: FrozenSet[str] = frozenset()
    occupants: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)

    def seat(self, attendee_id: str, table_id: str, seat_id: str) -> "PlacementState":
        occupants = dict(self.occupants)
        occupants[table_id] = occupants.get(table_id, ()) + (attendee_id,)
        return PlacementState(
            assignments=self.assignments + (SeatAssignment(attendee_id=attendee_id, table_id=table_id, seat_id=seat_id),),
            placed=self.placed | {attendee_id},
            occupants=occupants,
        )

    def at_table(self, table_id: str) -> Tuple[str, ...]:
        return self.occupants.get(table_id, ())


@dataclass(frozen=True)
class Arrangement:
    """Attendee -> (table, seat) for one run, in placement order."""

    assignments: Tuple[SeatAssignment, ...]
    unplaced: Tuple[str, ...] = ()

    @cached_property
    def _by_attendee(self) -> Dict[str, SeatAssignment]:
        return {a.attendee_id: a for a in self.assignments}

    def table_of(self, attendee_id: str) -> Optional[str]:
        assignment = self._by_attendee.get(attendee_id)
        return assignment.table_id if assignment else None

    def seat_of(self, attendee_id: str) -> Optional[Tuple[str, str]]:
        assignment = self._by_attendee.get(attendee_id)
        return (assignment.table_id, assignment.seat_id) if assignment else None

    def occupancy(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for a in self.assignments:
            counts[a.table_id] = counts.get(a.table_id, 0) + 1
        return counts

    def __len__(self) -> int:
        return len(self.assignments)


def place_pairs(
    pairs: List[Relationship],
    state: PlacementState,
    tracker: CapacityTracker,
) -> PlacementState:
    """Seat each unplaced pair together at the first table with two free seats."""
    for rel in pairs:
        a, b = rel.guest_id, rel.related_guest_id
        if a in state.placed or b in state.placed:
            continue

        tables = tracker.tables_with_room(2)
        if not tables:
            logger.debug("No table with two free seats for %s pair %s-%s", rel.relationship_type, a, b)
            continue

        table_id = tables[0]
        state = state.seat(a, table_id, tracker.take_seat(table_id))
        state = state.seat(b, table_id, tracker.take_seat(table_id))
    return state


def phase_two_order(
    attendees: List[Attendee],
    state: PlacementState,
    graph: RelationshipGraph,
    options: OptimizationOptions,
) -> List[Attendee]:
    """Remaining attendees: couple members first, then dietary restrictions. Stable."""
    remaining = [a for a in attendees if a.id not in state.placed]
    couples = graph.couple_members() if options.keep_couples_and_families_together else set()

    def key(attendee: Attendee) -> Tuple[int, int]:
        in_couple = attendee.id in couples
        dietary = options.respect_dietary_restrictions and attendee.has_dietary_restriction
        return (0 if in_couple else 1, 0 if dietary else 1)

    return sorted(remaining, key=key)


def place_remaining(
    order: List[Attendee],
    state: PlacementState,
    tracker: CapacityTracker,
    graph: RelationshipGraph,
    options: OptimizationOptions,
) -> Tuple[PlacementState, List[str]]:
    unplaced: List[str] = []

    for attendee in order:
        best_table = None
        best_score = None
        for table_id in candidate_tables(tracker):
            score = placement_score(attendee, table_id, state.at_table(table_id), tracker, graph, options)
            # strictly greater: the first table wins ties
            if best_score is None or score > best_score:
                best_score = score
                best_table = table_id

        if best_table is None:
            unplaced.append(attendee.id)
            continue

        logger.debug("Seating %s at %s (score %.2f)", attendee.id, best_table, best_score)
        state = state.seat(attendee.id, best_table, tracker.take_seat(best_table))

    return state, unplaced


def assign_seats(
    attendees: List[Attendee],
    tables: List[Table],
    graph: RelationshipGraph,
    options: OptimizationOptions,
    seats: Optional[List[Seat]] = None,
) -> Arrangement:
    """
    Two-phase greedy placement.

    Phase 1 pairs couples (and strong family ties) at the first table with
    room; those choices are final. Phase 2 seats everyone else one by one
    at the best-scoring table against the current partial assignment.
    """
    tracker = CapacityTracker(tables, seats)
    state = PlacementState()

    if options.keep_couples_and_families_together:
        state = place_pairs(graph.of_type("couple"), state, tracker)
        if options.prioritize_families:
            strong_family = [r for r in graph.of_type("family") if r.strength >= FAMILY_PAIRING_MIN_STRENGTH]
            state = place_pairs(strong_family, state, tracker)
        logger.info("Phase 1: paired %d attendees", len(state.placed))

    order = phase_two_order(attendees, state, graph, options)
    state, unplaced = place_remaining(order, state, tracker, graph, options)
    logger.info("Phase 2: seated %d more, %d unplaced", len(order) - len(unplaced), len(unplaced))

    return Arrangement(assignments=state.assignments, unplaced=tuple(unplaced))
