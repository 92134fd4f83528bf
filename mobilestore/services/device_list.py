"""Headless device list: what the screen shows and the actions it offers."""
from __future__ import annotations

import logging
import platform
import uuid
from dataclasses import dataclass, field
from typing import Optional

from mobilestore.core.config import Settings, get_settings
from mobilestore.core.errors import NotFoundError, PersistenceError
from mobilestore.domain.device import Device
from mobilestore.repositories.device_repository import DeviceRepositoryProtocol

logger = logging.getLogger(__name__)

EMPTY_CAPTION = "Devices is Empty"


def current_device(settings: Optional[Settings] = None) -> Device:
    """
    Identity of the host running the process.

    DEVICE_IDENTIFIER / DEVICE_MODEL win when set; otherwise the identifier
    is a UUID derived from the hardware address and the model is the host
    name.
    """
    settings = settings or get_settings()
    identifier = settings.device_identifier
    if not identifier:
        identifier = str(uuid.uuid5(uuid.NAMESPACE_OID, f"{uuid.getnode():012x}")).upper()
    model = settings.device_model or platform.node() or "unknown"
    return Device(identifier=identifier, model=model)


@dataclass(frozen=True)
class DeviceListState:
    devices: frozenset[Device] = field(default_factory=frozenset)
    this_device_exists: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.devices

    @property
    def can_save(self) -> bool:
        return not self.this_device_exists

    @property
    def total_caption(self) -> str:
        return f"Total: {len(self.devices)} devices"

    def lines(self) -> list[str]:
        if self.is_empty:
            return [EMPTY_CAPTION]
        return [device.label for device in sorted(self.devices, key=lambda d: (d.model, d.identifier))]


class DeviceListService:
    """Save this device, list saved devices, clear them."""

    def __init__(self, repository: DeviceRepositoryProtocol, this_device: Device) -> None:
        self._repo = repository
        self.this_device = this_device
        self.state = DeviceListState()

    def refresh(self) -> DeviceListState:
        self.state = DeviceListState(
            devices=frozenset(self._repo.get_all()),
            this_device_exists=self._repo.exists(self.this_device),
        )
        return self.state

    def save_this_device(self) -> DeviceListState:
        try:
            self._repo.save(self.this_device)
        except PersistenceError as exc:
            logger.error("Could not save %s: %s", self.this_device.identifier, exc)
            return self.state
        logger.info("Saved this device (%s)", self.this_device.label)
        return self.refresh()

    def clear(self) -> DeviceListState:
        """Delete every stored device (duplicates included), commit, refresh.

        The list is re-read first, so calling this before `refresh()` still
        clears the store.
        """
        removed = 0
        try:
            for device in self.refresh().devices:
                while self._repo.exists(device):
                    try:
                        self._repo.delete(device)
                    except NotFoundError:
                        break
                    removed += 1
            self._repo.commit()
        except PersistenceError as exc:
            logger.error("Could not clear devices: %s", exc)
        else:
            logger.info("Removed %d device records", removed)
        return self.refresh()
