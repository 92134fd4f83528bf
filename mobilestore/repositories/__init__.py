"""
Persistence adapters.

`store` wraps the SQLAlchemy session with generic CRUD primitives;
`device_repository` exposes device records as immutable `Device` values.
Services should depend on `DeviceRepositoryProtocol` rather than the session.
"""

from .device_repository import DeviceRepositoryProtocol, SQLDeviceRepository
from .memory import InMemoryDeviceRepository
from .store import PersistentStore, SessionState

__all__ = [
    "DeviceRepositoryProtocol",
    "InMemoryDeviceRepository",
    "PersistentStore",
    "SQLDeviceRepository",
    "SessionState",
]
