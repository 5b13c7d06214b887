"""
Settings for the seating optimizer, loaded from ``SEATPLAN_*`` environment
variables or a local ``.env`` file.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SEATPLAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # in Docker this becomes e.g. postgresql://user:pass@db:5432/seatplan
    database_url: str = Field(
        default="sqlite:///./seatplan.db",
        description="SQLAlchemy URL of the data store",
    )
    log_level: str = Field(default="INFO", description="Root log level")
    demo_mode: bool = Field(
        default=False,
        description="Generate sample relationships when the store has none",
    )
    demo_seed: int = Field(default=42, description="Seed for demo relationships")
    lock_timeout_seconds: Optional[float] = Field(
        default=None,
        description="How long a run waits for the venue lock (None = forever)",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
