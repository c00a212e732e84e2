"""Key-Value Store

設定値など小さな値を保存するための永続化インターフェース。
値はJSONとして保存する。

Related Classes: SettingsService (src/settings/service.py)
"""

from __future__ import annotations

import json
import os
import sqlite3
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional


class KeyValueStore(ABC):
    """get/setだけを提供するキー・バリューストアの基底クラス"""

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """キーの値を返す（存在しない場合はdefault）"""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """キーに値を保存する（JSONシリアライズ可能な値のみ）"""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """キーを削除する。存在しない場合False"""

    @abstractmethod
    def items(self) -> Dict[str, Any]:
        """全エントリのコピー"""


class InMemoryKeyValueStore(KeyValueStore):
    """プロセス内だけで完結するストア（テスト・一時利用向け）"""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, str] = {}
        self._lock = threading.Lock()
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            raw = self._data.get(key)
        return default if raw is None else json.loads(raw)

    def set(self, key: str, value: Any) -> None:
        raw = json.dumps(value, ensure_ascii=False)
        with self._lock:
            self._data[key] = raw

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._data.pop(key, None) is not None

    def items(self) -> Dict[str, Any]:
        with self._lock:
            snapshot = dict(self._data)
        return {key: json.loads(raw) for key, raw in snapshot.items()}


class SQLiteKeyValueStore(KeyValueStore):
    """SQLiteベースのキー・バリューストア。記録と同じDBファイルを使用。"""

    def __init__(self, db_path: Optional[Path] = None):
        root = Path(__file__).resolve().parents[2]
        default_path = root / "data" / "life_tracker.db"
        env_path = os.getenv("LIFE_TRACKER_DB_PATH")
        if db_path:
            self.db_path = Path(db_path)
        elif env_path:
            self.db_path = Path(env_path)
        else:
            self.db_path = default_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._initialize()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _initialize(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value_json TEXT NOT NULL
                )
                """
            )
            conn.commit()

    def get(self, key: str, default: Any = None) -> Any:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT value_json FROM kv_store WHERE key = ?", (key,)
            ).fetchone()
        if row is None:
            return default
        try:
            return json.loads(row["value_json"])
        except json.JSONDecodeError:
            return default

    def set(self, key: str, value: Any) -> None:
        value_json = json.dumps(value, ensure_ascii=False)
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO kv_store (key, value_json) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value_json = excluded.value_json
                """,
                (key, value_json),
            )
            conn.commit()

    def delete(self, key: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            conn.commit()
            return cursor.rowcount > 0

    def items(self) -> Dict[str, Any]:
        with self._connect() as conn:
            rows = conn.execute("SELECT key, value_json FROM kv_store").fetchall()
        result: Dict[str, Any] = {}
        for row in rows:
            try:
                result[row["key"]] = json.loads(row["value_json"])
            except json.JSONDecodeError:
                continue
        return result
