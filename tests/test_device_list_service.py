from __future__ import annotations

import dataclasses
import logging
import sys
from pathlib import Path

import pytest

# Garante que o pacote mobilestore seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from mobilestore.core import config as core_config  # noqa: E402
from mobilestore.core.errors import PersistenceError  # noqa: E402
from mobilestore.domain.device import Device  # noqa: E402
from mobilestore.repositories.memory import InMemoryDeviceRepository  # noqa: E402
from mobilestore.services.device_list import (  # noqa: E402
    EMPTY_CAPTION,
    DeviceListService,
    current_device,
)

THIS_DEVICE = Device(identifier="AAA-1", model="Phone1")


@pytest.fixture()
def repo():
    return InMemoryDeviceRepository()


@pytest.fixture()
def service(repo):
    return DeviceListService(repo, THIS_DEVICE)


def test_empty_store_offers_save(service):
    state = service.refresh()
    assert state.is_empty
    assert state.can_save
    assert state.lines() == [EMPTY_CAPTION]


def test_save_this_device_refreshes_state(service):
    state = service.save_this_device()
    assert state.this_device_exists
    assert not state.can_save
    assert state.devices == {THIS_DEVICE}
    assert state.lines() == ["Phone1 - AAA-1"]
    assert state.total_caption == "Total: 1 devices"


def test_failed_save_keeps_previous_state(service, repo, caplog):
    before = service.refresh()
    repo.fail_next_commit = True

    with caplog.at_level(logging.ERROR):
        state = service.save_this_device()

    assert state == before
    assert repo.get_all() == set()
    assert "Could not save AAA-1" in caplog.text


def test_lines_are_sorted_by_model(service, repo):
    repo.save(Device("Z-9", "Tablet"))
    repo.save(Device("B-2", "Laptop"))
    assert service.refresh().lines() == ["Laptop - B-2", "Tablet - Z-9"]


def test_clear_removes_duplicates_too(service, repo):
    repo.save(THIS_DEVICE)
    repo.save(THIS_DEVICE)
    repo.save(Device("B-2", "Laptop"))
    assert service.refresh().total_caption == "Total: 2 devices"

    state = service.clear()

    assert state.is_empty
    assert state.can_save
    assert repo.get_all() == set()


def test_clear_survives_substring_overlap(service, repo):
    # deleting "AAA-1" may remove "AAA-10" first; both must end up gone
    repo.save(Device("AAA-10", "Tablet"))
    repo.save(THIS_DEVICE)
    service.refresh()

    assert service.clear().is_empty


def test_current_device_prefers_configured_identity():
    settings = dataclasses.replace(
        core_config.get_settings(), device_identifier="DEV-42", device_model="Test rig"
    )
    assert current_device(settings) == Device("DEV-42", "Test rig")


def test_current_device_falls_back_to_host_identity():
    settings = dataclasses.replace(core_config.get_settings(), device_identifier="", device_model="")
    device = current_device(settings)
    assert device.identifier
    assert device.identifier == device.identifier.upper()
    assert device.model
    assert current_device(settings) == device


def test_clear_removes_device_without_identifier(repo):
    service = DeviceListService(repo, Device(identifier="", model="Phone1"))
    state = service.save_this_device()
    assert state.this_device_exists
    assert not state.can_save

    state = service.clear()

    assert state.is_empty
    assert state.can_save
    assert repo.get_all() == set()


def test_clear_without_prior_refresh_still_clears(repo):
    repo.save(THIS_DEVICE)
    repo.save(Device("B-2", "Laptop"))
    service = DeviceListService(repo, THIS_DEVICE)

    assert service.clear().is_empty
    assert repo.get_all() == set()


def test_clear_reports_failure_when_pending_deletes_are_lost(service, repo, monkeypatch, caplog):
    repo.save(THIS_DEVICE)

    def lost(device):
        raise PersistenceError("pending changes rolled back")

    monkeypatch.setattr(repo, "delete", lost)
    with caplog.at_level(logging.INFO):
        service.clear()

    assert "Could not clear devices" in caplog.text
    assert "Removed" not in caplog.text
