"""In-memory stand-in for `SQLDeviceRepository`, used by tests and previews."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from mobilestore.core.errors import NotFoundError, PersistenceError
from mobilestore.domain.device import Device, IdentifierMatch


@dataclass(eq=False)
class _Row:
    identifier: Optional[str]
    model: Optional[str]


class InMemoryDeviceRepository:
    """
    Same semantics as the SQL repository: save always inserts and commits,
    delete only marks a row until `commit()` (or the next save), and a
    failed commit restores the rows marked for deletion.
    """

    def __init__(self, identifier_match: IdentifierMatch = IdentifierMatch.SUBSTRING) -> None:
        self._match = identifier_match
        self._rows: list[_Row] = []
        self._pending_delete: list[_Row] = []
        self.fail_next_commit = False

    @property
    def identifier_match(self) -> IdentifierMatch:
        return self._match

    def _visible(self) -> list[_Row]:
        return [row for row in self._rows if not any(row is p for p in self._pending_delete)]

    def _first_match(self, identifier: str) -> Optional[_Row]:
        for row in self._visible():
            if self._match.matches(row.identifier, identifier):
                return row
        return None

    def _commit(self) -> None:
        if self.fail_next_commit:
            self.fail_next_commit = False
            self._pending_delete.clear()
            raise PersistenceError("commit failed: simulated failure")
        self._rows = self._visible()
        self._pending_delete.clear()

    def get_all(self) -> set[Device]:
        return {Device.from_record(row) for row in self._visible()}

    def find_by_identifier(self, identifier: str) -> Optional[Device]:
        row = self._first_match(identifier)
        return Device.from_record(row) if row is not None else None

    def save(self, device: Device) -> Device:
        row = _Row(identifier=device.identifier, model=device.model)
        self._rows.append(row)
        try:
            self._commit()
        except PersistenceError:
            self._rows.remove(row)
            raise
        return Device.from_record(row)

    def delete(self, device: Device) -> None:
        row = self._first_match(device.identifier)
        if row is None:
            raise NotFoundError(device.identifier)
        self._pending_delete.append(row)

    def commit(self) -> None:
        self._commit()

    def exists(self, device: Device) -> bool:
        return self.find_by_identifier(device.identifier) is not None
