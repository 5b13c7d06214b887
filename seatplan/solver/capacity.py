import re
from typing import Dict, List, Optional

from seatplan.errors import TableFullError
from seatplan.models import Seat, Table

_DIGITS = re.compile(r"(\d+)")


def seat_sort_key(seat_id: str) -> List:
    # "T1-2" < "T1-10": digit runs compare as numbers
    return [int(part) if part.isdigit() else part for part in _DIGITS.split(seat_id)]


def virtual_seats(tables: List[Table]) -> List[Seat]:
    """One seat per unit of capacity, for callers without seat records."""
    return [
        Seat(id=f"{table.id}-{n}", table_id=table.id)
        for table in tables
        for n in range(1, table.capacity + 1)
    ]


class CapacityTracker:
    """Free seats per table, consumed lowest seat id first."""

    def __init__(self, tables: List[Table], seats: Optional[List[Seat]] = None):
        if seats is None:
            seats = virtual_seats(tables)

        self.tables: Dict[str, Table] = {t.id: t for t in tables}
        # dict keeps table-list order, which is the candidate iteration order
        self._free: Dict[str, List[str]] = {t.id: [] for t in tables}
        for seat in seats:
            if seat.table_id in self._free:
                self._free[seat.table_id].append(seat.id)

        for table_id, seat_ids in self._free.items():
            seat_ids.sort(key=seat_sort_key)
            del seat_ids[self.tables[table_id].capacity:]

        self._taken: Dict[str, int] = {t.id: 0 for t in tables}

    def table_ids(self) -> List[str]:
        return list(self._free)

    def capacity(self, table_id: str) -> int:
        return self.tables[table_id].capacity

    def available_seats(self, table_id: str) -> int:
        return len(self._free[table_id])

    def seats_taken(self, table_id: str) -> int:
        return self._taken[table_id]

    def tables_with_room(self, minimum: int = 1) -> List[str]:
        return [table_id for table_id, free in self._free.items() if len(free) >= minimum]

    def take_seat(self, table_id: str) -> str:
        free = self._free[table_id]
        if not free:
            raise TableFullError(f"Table {table_id} has no free seats")
        self._taken[table_id] += 1
        return free.pop(0)

    def total_available(self) -> int:
        return sum(len(free) for free in self._free.values())
