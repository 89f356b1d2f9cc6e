"""Tests for the configured-timezone helpers."""

from datetime import datetime
from zoneinfo import ZoneInfo

from kitchenpos.services import order_service
from kitchenpos.utils.time_utils import local_tz, now_local, now_local_naive


def test_local_tz_reads_environment(monkeypatch):
    monkeypatch.setenv("APP_TIMEZONE", "Europe/Athens")
    assert local_tz() == ZoneInfo("Europe/Athens")


def test_explicit_name_wins(monkeypatch):
    monkeypatch.setenv("APP_TIMEZONE", "Europe/Athens")
    assert local_tz("UTC") == ZoneInfo("UTC")


def test_unknown_zone_falls_back_to_system_zone(monkeypatch):
    monkeypatch.setenv("APP_TIMEZONE", "Nowhere/Atlantis")
    assert local_tz() is not None


def test_now_helpers(monkeypatch):
    monkeypatch.setenv("APP_TIMEZONE", "UTC")
    assert now_local().tzinfo is not None
    assert now_local_naive().tzinfo is None


def test_ordered_time_uses_configured_zone(monkeypatch, storage, menu, occupied_table):
    monkeypatch.setenv("APP_TIMEZONE", "Pacific/Kiritimati")
    expected = datetime.now(ZoneInfo("Pacific/Kiritimati")).replace(tzinfo=None)

    with storage.unit_of_work() as uow:
        order = order_service.create_order(uow, occupied_table.id, [{"menu_id": menu.id, "quantity": 1}])

    assert order.ordered_time.tzinfo is None
    assert abs((order.ordered_time - expected).total_seconds()) < 60
