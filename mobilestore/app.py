"""Process entry point: builds the store once and owns its lifecycle."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.engine import Engine

from mobilestore.core.config import Settings, get_settings
from mobilestore.core.log import configure_logging
from mobilestore.db.models import create_schema
from mobilestore.db.session import make_engine, make_sessionmaker
from mobilestore.domain.device import Device, IdentifierMatch
from mobilestore.repositories.device_repository import SQLDeviceRepository
from mobilestore.repositories.store import PersistentStore
from mobilestore.services.device_list import DeviceListService, current_device

logger = logging.getLogger(__name__)


@dataclass
class App:
    settings: Settings
    engine: Engine
    store: PersistentStore
    repository: SQLDeviceRepository
    devices: DeviceListService

    def close(self) -> None:
        self.store.close()
        self.engine.dispose()

    def __enter__(self) -> "App":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def create_app(settings: Optional[Settings] = None, this_device: Optional[Device] = None) -> App:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    engine = make_engine(settings.database_url)
    create_schema(engine)
    store = PersistentStore(make_sessionmaker(engine)(), strict_fetch=settings.strict_fetch)
    repository = SQLDeviceRepository(store, IdentifierMatch.parse(settings.identifier_match))
    service = DeviceListService(repository, this_device or current_device(settings))
    logger.info(
        "Device store ready (%s, match=%s)", engine.url.render_as_string(hide_password=True),
        repository.identifier_match.value,
    )
    return App(settings=settings, engine=engine, store=store, repository=repository, devices=service)
