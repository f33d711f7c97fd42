"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

from quake_query.client import BASE_URL


@dataclass(frozen=True)
class Settings:
    base_url: str = BASE_URL
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from QUAKE_QUERY_* environment variables."""
        return cls(
            base_url=os.environ.get("QUAKE_QUERY_BASE_URL", BASE_URL),
            log_level=os.environ.get("QUAKE_QUERY_LOG_LEVEL", "WARNING").upper(),
        )
