"""KeyValueStore の単体テスト"""

import pytest

from src.storage import InMemoryKeyValueStore, SQLiteKeyValueStore


@pytest.fixture(params=["memory", "sqlite"])
def store(request, tmp_path):
    if request.param == "memory":
        return InMemoryKeyValueStore()
    return SQLiteKeyValueStore(db_path=tmp_path / "kv.db")


def test_get_missing_returns_default(store):
    assert store.get("theme") is None
    assert store.get("theme", "light") == "light"


def test_set_and_overwrite(store):
    store.set("theme", "dark")
    assert store.get("theme") == "dark"
    store.set("theme", "light")
    assert store.get("theme") == "light"


def test_json_values(store):
    store.set("flags", {"a": True, "b": [1, 2]})
    store.set("enabled", False)
    assert store.get("flags") == {"a": True, "b": [1, 2]}
    assert store.get("enabled", True) is False
    assert store.items() == {"flags": {"a": True, "b": [1, 2]}, "enabled": False}


def test_delete(store):
    store.set("key", 1)
    assert store.delete("key") is True
    assert store.delete("key") is False
    assert store.get("key") is None


def test_sqlite_store_persists(tmp_path):
    SQLiteKeyValueStore(db_path=tmp_path / "kv.db").set("reminder_time", "07:30")
    assert SQLiteKeyValueStore(db_path=tmp_path / "kv.db").get("reminder_time") == "07:30"


def test_in_memory_initial_values():
    store = InMemoryKeyValueStore({"theme": "dark"})
    assert store.get("theme") == "dark"
