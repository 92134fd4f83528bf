"""Database helpers (engine/session export)."""

from .session import Base, get_engine, make_engine, make_sessionmaker

__all__ = ["Base", "get_engine", "make_engine", "make_sessionmaker"]
