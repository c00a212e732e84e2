"""Key-value persistence used for application settings."""

from .kv_store import InMemoryKeyValueStore, KeyValueStore, SQLiteKeyValueStore

__all__ = [
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "SQLiteKeyValueStore",
]
