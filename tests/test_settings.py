"""設定サービスのテスト"""

from datetime import datetime
from unittest.mock import MagicMock

import pytest

from src.settings import AppSettings, SettingsError, SettingsService, format_timestamp
from src.storage import InMemoryKeyValueStore, SQLiteKeyValueStore


def test_defaults():
    settings = SettingsService(InMemoryKeyValueStore()).current
    assert settings == AppSettings()
    assert settings.sort_newest_first is True
    assert settings.reminder_time == "20:00"
    assert settings.theme == "light"
    assert settings.record_color == "#3b82f6"
    assert settings.ai_api_key is None


def test_settings_are_immutable():
    settings = AppSettings()
    with pytest.raises(Exception):
        settings.theme = "dark"  # type: ignore[misc]


def test_update_returns_new_value_and_persists(tmp_path):
    store = SQLiteKeyValueStore(db_path=tmp_path / "settings.db")
    service = SettingsService(store)
    before = service.current

    after = service.update(theme="dark", reminder_enabled=True, reminder_time="07:15")

    assert before.theme == "light"
    assert after.theme == "dark"
    assert after.reminder_enabled is True
    assert service.current is after

    reloaded = SettingsService(SQLiteKeyValueStore(db_path=tmp_path / "settings.db")).current
    assert reloaded == after


@pytest.mark.parametrize(
    "changes",
    [
        {"theme": "blue"},
        {"reminder_time": "25:00"},
        {"reminder_time": "8pm"},
        {"record_color": "red"},
        {"sort_newest_first": "yes"},
        {"unknown_option": True},
    ],
)
def test_invalid_updates_store_nothing(changes):
    store = InMemoryKeyValueStore()
    service = SettingsService(store)
    with pytest.raises(SettingsError):
        service.update(**{"show_seconds": True, **changes})
    assert store.items() == {}
    assert service.current.theme == "light"


def test_api_key_is_normalized():
    service = SettingsService(InMemoryKeyValueStore())
    assert service.update(ai_api_key="  sk-123  ").ai_api_key == "sk-123"
    assert service.update(ai_api_key="").ai_api_key is None


def test_invalid_stored_values_fall_back_to_defaults():
    store = InMemoryKeyValueStore({"theme": "purple", "time_24h": True})
    settings = SettingsService(store).current
    assert settings.theme == "light"
    assert settings.time_24h is True


def test_listeners_receive_updates():
    service = SettingsService(InMemoryKeyValueStore())
    listener = MagicMock()
    service.subscribe(listener)

    updated = service.update(reminder_enabled=True)

    listener.assert_called_once_with(updated)


def test_failing_listener_does_not_break_update():
    service = SettingsService(InMemoryKeyValueStore())
    service.subscribe(MagicMock(side_effect=RuntimeError("boom")))
    assert service.update(show_seconds=True).show_seconds is True


def test_to_dict_hides_api_key():
    data = AppSettings(ai_api_key="secret").to_dict()
    assert "ai_api_key" not in data
    assert data["ai_api_key_set"] is True
    assert AppSettings(ai_api_key="secret").to_dict(include_secrets=True)["ai_api_key"] == "secret"


@pytest.mark.parametrize(
    "settings, expected",
    [
        (AppSettings(time_24h=True), "2023-08-15 20:05"),
        (AppSettings(time_24h=True, show_seconds=True), "2023-08-15 20:05:09"),
        (AppSettings(), "2023-08-15 08:05 PM"),
        (AppSettings(show_seconds=True), "2023-08-15 08:05:09 PM"),
    ],
)
def test_format_timestamp(settings, expected):
    assert format_timestamp(datetime(2023, 8, 15, 20, 5, 9), settings) == expected
