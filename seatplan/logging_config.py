"""
Logging setup shared by the API and library callers.

Format: 2026-01-06T14:05:52Z [seatplan.solver.core] INFO message
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone


class ISO8601Formatter(logging.Formatter):
    """Formatter producing ISO8601 UTC timestamps and the logger name."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return f"{timestamp} [{record.name}] {record.levelname} {message}"


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Install a single stdout handler on the root logger.

    Args:
        level: Level name ("DEBUG", "INFO", ...) or numeric level

    Returns:
        The configured root logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    # Clear existing handlers to avoid duplicates on reconfigure
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(ISO8601Formatter())
    root_logger.addHandler(handler)

    return root_logger
