"""
Configuration helpers for mobilestore.

Settings are read from environment variables once and cached, so that the
store, repository and service never fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    identifier_match: str
    strict_fetch: bool
    device_identifier: str
    device_model: str
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        database_url=(os.getenv("DATABASE_URL") or "sqlite:///mobile_model.sqlite").strip(),
        identifier_match=(os.getenv("IDENTIFIER_MATCH") or "substring").strip().lower(),
        strict_fetch=_bool(os.getenv("STRICT_FETCH"), False),
        device_identifier=os.getenv("DEVICE_IDENTIFIER", "").strip(),
        device_model=os.getenv("DEVICE_MODEL", "").strip(),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
