"""
Data Store capability used by the optimizer.

The optimizer never builds a store itself: callers pass one in. Two
implementations live here, an in-memory one for tests and scripts and a
SQLAlchemy one backed by ``seatplan.database``.
"""

import logging
from typing import Callable, Dict, List, Optional, Protocol

from pydantic import ValidationError
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from seatplan.database import AttendeeRecord, RelationshipRecord, SeatRecord, TableRecord
from seatplan.errors import DataStoreReadError, DataStoreWriteError
from seatplan.models import Attendee, Relationship, Seat, Table

logger = logging.getLogger(__name__)


class DataStore(Protocol):
    venue_id: str

    def load_attendees(self) -> List[Attendee]: ...

    def load_tables(self) -> List[Table]: ...

    def load_seats(self) -> List[Seat]: ...

    def load_relationships(self) -> List[Relationship]: ...

    def clear_seats(self) -> None:
        """Remove the attendee from every seat of the venue."""
        ...

    def assign_seat(self, seat_id: str, attendee_id: str) -> None: ...


class InMemoryDataStore:
    def __init__(
        self,
        attendees: List[Attendee],
        tables: List[Table],
        relationships: Optional[List[Relationship]] = None,
        seats: Optional[List[Seat]] = None,
        venue_id: str = "default",
    ):
        self.venue_id = venue_id
        self.attendees = list(attendees)
        self.tables = list(tables)
        self.relationships = list(relationships or [])
        if seats is None:
            seats = [
                Seat(id=f"{t.id}-{n}", table_id=t.id)
                for t in self.tables
                for n in range(1, t.capacity + 1)
            ]
        self.seats: Dict[str, Seat] = {s.id: s.model_copy() for s in seats}

    def load_attendees(self) -> List[Attendee]:
        return list(self.attendees)

    def load_tables(self) -> List[Table]:
        return list(self.tables)

    def load_seats(self) -> List[Seat]:
        return [s.model_copy() for s in self.seats.values()]

    def load_relationships(self) -> List[Relationship]:
        return list(self.relationships)

    def clear_seats(self) -> None:
        for seat in self.seats.values():
            seat.attendee_id = None

    def assign_seat(self, seat_id: str, attendee_id: str) -> None:
        if seat_id not in self.seats:
            raise DataStoreWriteError(f"Seat {seat_id} does not exist")
        self.seats[seat_id].attendee_id = attendee_id

    def seat_assignments(self) -> Dict[str, str]:
        """seat id -> attendee id, occupied seats only."""
        return {s.id: s.attendee_id for s in self.seats.values() if s.attendee_id is not None}


class SqlDataStore:
    """
    Store for one event (venue) in the SQL database.

    Every write runs in its own transaction, so a clear followed by a
    sequence of seat writes is not atomic as a whole.
    """

    def __init__(self, session_factory: Callable[[], Session], venue_id: str):
        self.session_factory = session_factory
        self.venue_id = venue_id

    def _table_ids(self):
        return select(TableRecord.id).where(TableRecord.event_id == self.venue_id)

    def load_attendees(self) -> List[Attendee]:
        try:
            with self.session_factory() as session:
                rows = session.scalars(
                    select(AttendeeRecord).where(AttendeeRecord.event_id == self.venue_id).order_by(AttendeeRecord.id)
                ).all()
                return [
                    Attendee(
                        id=r.id,
                        name=r.name or "Guest",
                        rsvp_status=r.rsvp_status or "pending",
                        category=r.category or "other",
                        dietary_restrictions=r.dietary_restrictions,
                    )
                    for r in rows
                ]
        except (SQLAlchemyError, ValidationError) as exc:
            raise DataStoreReadError(f"Could not load attendees: {exc}") from exc

    def load_tables(self) -> List[Table]:
        try:
            with self.session_factory() as session:
                rows = session.scalars(
                    select(TableRecord)
                    .where(TableRecord.event_id == self.venue_id)
                    .order_by(TableRecord.position, TableRecord.id)
                ).all()
                return [Table(id=r.id, name=r.name or "Table", capacity=r.capacity, shape=r.shape or "round") for r in rows]
        except (SQLAlchemyError, ValidationError) as exc:
            raise DataStoreReadError(f"Could not load tables: {exc}") from exc

    def load_seats(self) -> List[Seat]:
        try:
            with self.session_factory() as session:
                rows = session.scalars(
                    select(SeatRecord).where(SeatRecord.table_id.in_(self._table_ids())).order_by(SeatRecord.id)
                ).all()
                return [Seat(id=r.id, table_id=r.table_id, attendee_id=r.guest_id) for r in rows]
        except (SQLAlchemyError, ValidationError) as exc:
            raise DataStoreReadError(f"Could not load seats: {exc}") from exc

    def load_relationships(self) -> List[Relationship]:
        try:
            with self.session_factory() as session:
                rows = session.scalars(
                    select(RelationshipRecord)
                    .where(RelationshipRecord.event_id == self.venue_id)
                    .order_by(RelationshipRecord.id)
                ).all()
                return [
                    Relationship(
                        guest_id=r.guest_id,
                        related_guest_id=r.related_guest_id,
                        relationship_type=r.relationship_type,
                        strength=r.strength,
                    )
                    for r in rows
                ]
        except (SQLAlchemyError, ValidationError) as exc:
            raise DataStoreReadError(f"Could not load relationships: {exc}") from exc

    def clear_seats(self) -> None:
        try:
            with self.session_factory() as session:
                session.execute(
                    update(SeatRecord)
                    .where(SeatRecord.table_id.in_(self._table_ids()))
                    .values(guest_id=None)
                    .execution_options(synchronize_session=False)
                )
                session.commit()
        except SQLAlchemyError as exc:
            raise DataStoreWriteError(f"Could not clear seats: {exc}") from exc

    def assign_seat(self, seat_id: str, attendee_id: str) -> None:
        try:
            with self.session_factory() as session:
                result = session.execute(
                    update(SeatRecord)
                    .where(SeatRecord.id == seat_id)
                    .values(guest_id=attendee_id)
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount == 0:
                    raise DataStoreWriteError(f"Seat {seat_id} does not exist")
                session.commit()
        except SQLAlchemyError as exc:
            raise DataStoreWriteError(f"Could not assign seat {seat_id}: {exc}") from exc

    def seat_assignments(self) -> Dict[str, str]:
        try:
            with self.session_factory() as session:
                rows = session.execute(
                    select(SeatRecord.id, SeatRecord.guest_id).where(
                        SeatRecord.table_id.in_(self._table_ids()), SeatRecord.guest_id.is_not(None)
                    )
                ).all()
                return {seat_id: guest_id for seat_id, guest_id in rows}
        except (SQLAlchemyError, ValidationError) as exc:
            raise DataStoreReadError(f"Could not load seat assignments: {exc}") from exc
