"""Per-venue locks serializing optimization runs."""

import threading
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

from seatplan.errors import OptimizationInProgressError

_registry_lock = threading.Lock()
_venue_locks: Dict[str, threading.RLock] = {}


def lock_for(venue_id: str) -> threading.RLock:
    with _registry_lock:
        lock = _venue_locks.get(venue_id)
        if lock is None:
            lock = _venue_locks[venue_id] = threading.RLock()
        return lock


@contextmanager
def venue_lock(venue_id: str, timeout: Optional[float] = None) -> Iterator[None]:
    """
    Hold the venue's lock for the duration of the block.

    Re-entrant, so a service holding the lock across load and optimize can
    let the commit step take it again. Raises OptimizationInProgressError
    if the lock is not free within ``timeout`` seconds.
    """
    lock = lock_for(venue_id)
    if not lock.acquire(timeout=-1 if timeout is None else timeout):
        raise OptimizationInProgressError(f"Another optimization is running for venue {venue_id}")
    try:
        yield
    finally:
        lock.release()
