"""
Venue-level optimization: load a snapshot from the store, optimize, commit.

The venue lock is held from the first read to the last write, so two
triggers for the same venue never interleave their clears and writes.
"""

import logging
from typing import List, Optional

from seatplan.config import Settings, get_settings
from seatplan.demo import generate_sample_relationships
from seatplan.errors import DataStoreReadError, SeatingError
from seatplan.locking import venue_lock
from seatplan.models import Attendee, OptimizationOptions, OptimizationResult, Relationship
from seatplan.solver.core import ProgressCallback, failed_result, optimize
from seatplan.store import DataStore

logger = logging.getLogger(__name__)


def load_relationships(store: DataStore, attendees: List[Attendee], settings: Settings) -> List[Relationship]:
    """Relationships from the store, or sample ones when demo mode allows it."""
    try:
        relationships = store.load_relationships()
    except DataStoreReadError as exc:
        if not settings.demo_mode:
            raise
        logger.warning("Could not read relationships (%s), demo mode: generating sample relationships", exc)
        return generate_sample_relationships(attendees, settings.demo_seed)

    if not relationships and settings.demo_mode:
        logger.warning("No relationships for venue %s, demo mode: generating sample relationships", store.venue_id)
        return generate_sample_relationships(attendees, settings.demo_seed)
    return relationships


def optimize_venue(
    store: DataStore,
    options: Optional[OptimizationOptions] = None,
    *,
    settings: Optional[Settings] = None,
    progress: Optional[ProgressCallback] = None,
) -> OptimizationResult:
    if settings is None:
        settings = get_settings()

    try:
        with venue_lock(store.venue_id, settings.lock_timeout_seconds):
            attendees = store.load_attendees()
            tables = store.load_tables()
            seats = store.load_seats()
            relationships = load_relationships(store, attendees, settings)
            return optimize(
                attendees, tables, relationships, options,
                seats=seats, store=store, progress=progress,
                lock_timeout=settings.lock_timeout_seconds,
            )
    except SeatingError as exc:
        logger.error("Optimization for venue %s aborted: %s", store.venue_id, exc)
        return failed_result(exc)
