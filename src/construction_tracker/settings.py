"""
construction_tracker.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Single settings object shared by the database, repositories and the API.
    Every field can be overridden with a `CMT_`-prefixed environment variable.
    """

    model_config = SettingsConfigDict(env_prefix="CMT_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "construction-tracker"
    log_level: str = "INFO"

    api_host: str = "127.0.0.1"
    api_port: int = 8080

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./construction.db"
    # Seconds SQLite waits on a locked database before giving up.
    busy_timeout_seconds: float = Field(default=5.0, gt=0)
    pool_size: int = Field(default=4, ge=1)

    # Export consumer
    export_dir: str = "./exports"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# The database lifecycle manager reads `database_url` exactly once, when the
# process-wide database instance is first constructed.
