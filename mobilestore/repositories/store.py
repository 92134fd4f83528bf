"""Generic CRUD helpers over one long-lived SQLAlchemy session."""
from __future__ import annotations

import logging
from enum import Enum
from typing import TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mobilestore.core.errors import PersistenceError

logger = logging.getLogger(__name__)

M = TypeVar("M")


class SessionState(str, Enum):
    CLEAN = "clean"
    DIRTY = "dirty"
    ROLLED_BACK = "rolled_back"


class PersistentStore:
    """
    Fetch/create/remove/save primitives for any mapped model class.

    The session is handed in by the entry point and lives as long as the
    store; nothing here opens or closes sessions on its own. Creates and
    removals stay pending until `save()` commits them.

    Fetch failures are logged and turned into empty results unless the
    store was built with ``strict_fetch=True``. A fetch whose autoflush
    fails always raises `PersistenceError`, since the rollback it forces
    discards the pending changes.
    """

    def __init__(self, session: Session, *, strict_fetch: bool = False) -> None:
        self._session = session
        self._strict_fetch = strict_fetch
        self._state = SessionState.CLEAN

    @property
    def session(self) -> Session:
        return self._session

    @property
    def state(self) -> SessionState:
        if self._session.new or self._session.dirty or self._session.deleted:
            return SessionState.DIRTY
        return self._state

    # -------------------------- reads --------------------------
    def fetch_all(self, model: type[M]) -> set[M]:
        return self._fetch(model, select(model))

    def find_containing(self, model: type[M], column: str, needle: str) -> set[M]:
        """Records whose ``column`` contains ``needle`` (case-sensitive).

        NULL compares as "", so an empty needle returns every record.
        """
        if not needle:
            return self.fetch_all(model)
        attr = getattr(model, column)
        rows = self._fetch(model, select(model).where(attr.contains(needle, autoescape=True)))
        # LIKE ignores case on SQLite; keep only exact-case hits
        return {row for row in rows if needle in (getattr(row, column) or "")}

    def find_equal(self, model: type[M], column: str, value: str) -> set[M]:
        attr = getattr(model, column)
        return self._fetch(model, select(model).where(func.coalesce(attr, "") == (value or "")))

    def _fetch(self, model: type[M], stmt) -> set[M]:
        try:
            return set(self._session.execute(stmt).scalars().all())
        except SQLAlchemyError as exc:
            if not self._session.is_active:
                # a failed autoflush deactivated the session: pending changes are gone
                logger.error("Flush before fetch of %s failed, rolling back: %s", model.__name__, exc)
                self.rollback()
                raise PersistenceError(f"pending changes rolled back: {exc}") from exc
            if self._strict_fetch:
                raise PersistenceError(f"fetch of {model.__name__} failed: {exc}") from exc
            logger.warning("Fetch of %s failed, returning no rows: %s", model.__name__, exc)
            return set()

    # -------------------------- writes --------------------------
    def create(self, model: type[M]) -> M:
        entity = model()
        self._session.add(entity)
        self._state = SessionState.DIRTY
        return entity

    def remove(self, entity: object) -> None:
        if entity in self._session.new:
            self._session.expunge(entity)
        else:
            self._session.delete(entity)
        self._state = SessionState.DIRTY

    def save(self) -> None:
        try:
            self._session.commit()
        except SQLAlchemyError as exc:
            logger.error("Commit failed, rolling back pending changes: %s", exc)
            self.rollback()
            raise PersistenceError(f"commit failed: {exc}") from exc
        self._state = SessionState.CLEAN

    def rollback(self) -> None:
        self._session.rollback()
        self._state = SessionState.ROLLED_BACK

    def close(self) -> None:
        self._session.close()
