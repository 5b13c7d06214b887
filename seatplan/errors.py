"""Seating optimizer error classes.

Store failures are wrapped into the DataStore* errors at the store boundary,
so nothing above ``seatplan.store`` has to know about SQLAlchemy.
"""

from __future__ import annotations


class SeatingError(Exception):
    """Base exception for the seating optimizer."""

    pass


class InvalidRelationshipError(SeatingError):
    """Raised when a relationship references the same attendee twice."""

    pass


class TableFullError(SeatingError):
    """Raised when a seat is requested from a table with no free seats."""

    pass


class OptimizationInProgressError(SeatingError):
    """Raised when another run holds the venue lock past the timeout."""

    pass


class DataStoreError(SeatingError):
    """Base exception for data store failures."""

    pass


class DataStoreReadError(DataStoreError):
    """Raised when attendees, tables, seats or relationships cannot be read."""

    pass


class DataStoreWriteError(DataStoreError):
    """Raised when seat assignments cannot be written."""

    pass


class PartialCommitError(DataStoreWriteError):
    """Raised when a write fails after the venue was already cleared.

    The venue is left with every seat cleared and only the first ``written``
    of ``total`` assignments persisted. This is not retryable: re-run the
    optimization or restore the venue from a backup.
    """

    def __init__(self, written: int, total: int, cause: Exception | None = None):
        self.written = written
        self.total = total
        self.cause = cause
        super().__init__(
            f"Commit interrupted after {written} of {total} seat assignments; "
            f"venue state is inconsistent ({cause})"
        )
