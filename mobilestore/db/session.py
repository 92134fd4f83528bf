"""Engine/session helpers for the SQL backend."""
from __future__ import annotations

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from mobilestore.core.config import get_settings

Base = declarative_base()


def make_engine(url: str) -> Engine:
    url = (url or "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL must be configured to open the device store.")
    return create_engine(url, future=True, pool_pre_ping=True)


@lru_cache
def get_engine() -> Engine:
    """Engine for the configured DATABASE_URL, built once per process."""
    return make_engine(get_settings().database_url)


def make_sessionmaker(engine: Engine) -> sessionmaker:
    # autoflush keeps pending inserts/deletes visible to queries before commit
    return sessionmaker(bind=engine, autoflush=True, autocommit=False, future=True)
