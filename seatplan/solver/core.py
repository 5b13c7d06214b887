import logging
import time
from typing import Callable, List, Optional

from seatplan.errors import SeatingError
from seatplan.locking import venue_lock
from seatplan.models import (
    Attendee,
    OptimizationOptions,
    OptimizationResult,
    Relationship,
    Seat,
    Table,
)
from seatplan.solver.commit import commit_arrangement
from seatplan.solver.graph import build_relationship_graph
from seatplan.solver.greedy import assign_seats
from seatplan.solver.objectives import arrangement_score, conflicts_seated_together
from seatplan.store import DataStore

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, str], None]

SUCCESS_MESSAGE = "Seating optimization completed successfully"


def _no_progress(percent: int, stage: str) -> None:
    pass


def eligible_attendees(attendees: List[Attendee]) -> List[Attendee]:
    """Confirmed attendees in input order; a repeated id keeps its first record."""
    seen = set()
    eligible = []
    for a in attendees:
        if not a.is_eligible:
            continue
        if a.id in seen:
            logger.warning("Duplicate attendee %s ignored", a.id)
            continue
        seen.add(a.id)
        eligible.append(a)
    return eligible


def failed_result(exc: Exception) -> OptimizationResult:
    return OptimizationResult(
        success=False,
        message=f"Optimization failed: {exc}",
        assignments=[],
        score=0.0,
        error_type=type(exc).__name__,
    )


def completion_message(unplaced: int) -> str:
    if not unplaced:
        return SUCCESS_MESSAGE
    noun = "attendee" if unplaced == 1 else "attendees"
    return f"Seating optimization completed: {unplaced} {noun} could not be seated"


def optimize(
    attendees: List[Attendee],
    tables: List[Table],
    relationships: List[Relationship],
    options: Optional[OptimizationOptions] = None,
    *,
    seats: Optional[List[Seat]] = None,
    store: Optional[DataStore] = None,
    progress: Optional[ProgressCallback] = None,
    lock_timeout: Optional[float] = None,
) -> OptimizationResult:
    """
    Compute a seating arrangement and, when ``store`` is given, commit it.

    Never raises for seating errors: invalid input, store failures and
    partial commits come back as an unsuccessful result whose
    ``error_type`` names the error.
    """
    if options is None:
        options = OptimizationOptions()
    report = progress or _no_progress
    start_time = time.time()

    try:
        report(10, "preparing")
        eligible = eligible_attendees(attendees)
        if store is not None and seats is None:
            seats = store.load_seats()
        graph = build_relationship_graph(relationships, [a.id for a in eligible])
        logger.info(
            "Optimizing %d attendees over %d tables with %d relationships",
            len(eligible), len(tables), len(graph),
        )

        report(30, "placing")
        arrangement = assign_seats(eligible, tables, graph, options, seats)

        report(70, "scoring")
        score = arrangement_score(arrangement, graph, options)
        conflicts = conflicts_seated_together(arrangement, graph)
        if conflicts:
            logger.info("%d conflicting pairs share a table", len(conflicts))

        if store is not None:
            report(85, "committing")
            with venue_lock(store.venue_id, lock_timeout):
                commit_arrangement(store, arrangement)
    except SeatingError as exc:
        logger.error("Seating optimization failed: %s", exc)
        return failed_result(exc)

    report(100, "done")
    logger.info(
        "Placed %d attendees, %d unplaced, score %.2f in %.3fs",
        len(arrangement), len(arrangement.unplaced), score, time.time() - start_time,
    )
    return OptimizationResult(
        success=True,
        message=completion_message(len(arrangement.unplaced)),
        assignments=list(arrangement.assignments),
        score=score,
        unplaced=list(arrangement.unplaced),
    )
