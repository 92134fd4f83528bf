"""Device records exposed as immutable `Device` values."""
from __future__ import annotations

import logging
from typing import Iterable, Optional, Protocol, runtime_checkable

from mobilestore.core.errors import NotFoundError
from mobilestore.db.models import DeviceRecord
from mobilestore.domain.device import Device, IdentifierMatch

from .store import PersistentStore

logger = logging.getLogger(__name__)


@runtime_checkable
class DeviceRepositoryProtocol(Protocol):
    """Capability set the device list service depends on."""

    def get_all(self) -> set[Device]: ...

    def find_by_identifier(self, identifier: str) -> Optional[Device]: ...

    def save(self, device: Device) -> Device: ...

    def delete(self, device: Device) -> None: ...

    def commit(self) -> None: ...

    def exists(self, device: Device) -> bool: ...


def _first(records: Iterable[DeviceRecord]) -> Optional[DeviceRecord]:
    # oldest row wins so repeated lookups are stable
    return min(records, key=lambda r: r.id or 0, default=None)


class SQLDeviceRepository:
    """Device CRUD on top of a `PersistentStore`."""

    def __init__(
        self,
        store: PersistentStore,
        identifier_match: IdentifierMatch = IdentifierMatch.SUBSTRING,
    ) -> None:
        self._store = store
        self._match = identifier_match

    @property
    def identifier_match(self) -> IdentifierMatch:
        return self._match

    def _matching(self, identifier: str) -> set[DeviceRecord]:
        if self._match is IdentifierMatch.EXACT:
            return self._store.find_equal(DeviceRecord, "identifier", identifier)
        return self._store.find_containing(DeviceRecord, "identifier", identifier)

    def get_all(self) -> set[Device]:
        return {Device.from_record(record) for record in self._store.fetch_all(DeviceRecord)}

    def find_by_identifier(self, identifier: str) -> Optional[Device]:
        record = _first(self._matching(identifier))
        return Device.from_record(record) if record is not None else None

    def save(self, device: Device) -> Device:
        """Insert a new record for ``device`` and commit the whole session."""
        record = self._store.create(DeviceRecord)
        record.identifier = device.identifier
        record.model = device.model
        self._store.save()
        logger.debug("Saved device %s", device.identifier)
        return Device.from_record(record)

    def delete(self, device: Device) -> None:
        """Mark the first matching record for deletion; `commit()` applies it."""
        record = _first(self._matching(device.identifier))
        if record is None:
            raise NotFoundError(device.identifier)
        self._store.remove(record)

    def commit(self) -> None:
        self._store.save()

    def exists(self, device: Device) -> bool:
        return self.find_by_identifier(device.identifier) is not None
