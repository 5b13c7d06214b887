import logging

from seatplan.errors import DataStoreWriteError, PartialCommitError
from seatplan.solver.greedy import Arrangement
from seatplan.store import DataStore

logger = logging.getLogger(__name__)


def commit_arrangement(store: DataStore, arrangement: Arrangement) -> int:
    """
    Replace the venue's persisted arrangement with ``arrangement``.

    Clears every seat of the venue, then writes the assignments one by one.
    The two steps are not atomic: if a write fails after the clear, the
    venue keeps all seats cleared plus only the assignments written so far,
    and PartialCommitError is raised. Callers must hold the venue lock.

    An arrangement naming a seat the store does not know is rejected
    before anything is cleared.

    Returns the number of seats written.
    """
    known = {seat.id for seat in store.load_seats()}
    missing = [a.seat_id for a in arrangement.assignments if a.seat_id not in known]
    if missing:
        raise DataStoreWriteError(
            f"Arrangement references unknown seats for venue {store.venue_id}: {', '.join(missing)}"
        )

    # full reset of the whole venue, not a delta
    store.clear_seats()

    total = len(arrangement.assignments)
    written = 0
    for assignment in arrangement.assignments:
        try:
            store.assign_seat(assignment.seat_id, assignment.attendee_id)
        except DataStoreWriteError as exc:
            logger.error(
                "Commit for venue %s failed after %d/%d seats, venue state is inconsistent",
                store.venue_id, written, total,
            )
            raise PartialCommitError(written, total, exc) from exc
        written += 1

    logger.info("Committed %d seat assignments for venue %s", written, store.venue_id)
    return written
