from __future__ import annotations

import os
import re
import sqlite3
import time
from datetime import date as date_type
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Iterable, Optional

from .exceptions import RecordValidationError
from .models import Record

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def default_timestamp_format(moment: datetime) -> str:
    """表示用タイムスタンプ（例: 2023-08-15 08:30）"""
    return moment.strftime("%Y-%m-%d %H:%M")


def validate_date(value: str) -> str:
    """YYYY-MM-DD形式の実在する日付であることを検証して返す"""
    if not isinstance(value, str) or not _ISO_DATE.match(value):
        raise RecordValidationError(f"Invalid date (expected YYYY-MM-DD): {value!r}")
    try:
        date_type.fromisoformat(value)
    except ValueError as exc:
        raise RecordValidationError(f"Invalid calendar date: {value}") from exc
    return value


class RecordRepository:
    """SQLiteベースの記録ストア。"""

    def __init__(
        self,
        db_path: Optional[Path] = None,
        timestamp_formatter: Optional[Callable[[datetime], str]] = None,
    ):
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
        self.timestamp_formatter = timestamp_formatter or default_timestamp_format
        self._initialize()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _initialize(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS records (
                    id INTEGER PRIMARY KEY,
                    text TEXT NOT NULL DEFAULT '',
                    timestamp TEXT NOT NULL,
                    date TEXT NOT NULL,
                    image_data TEXT,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
                """
            )
            conn.execute("CREATE INDEX IF NOT EXISTS idx_records_date ON records(date)")
            conn.commit()

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> Record:
        return Record(
            id=row["id"],
            text=row["text"],
            timestamp=row["timestamp"],
            date=row["date"],
            image_data=row["image_data"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def _display(self, moment: datetime) -> str:
        return self.timestamp_formatter(moment.astimezone())

    @staticmethod
    def _instant_from_display(value: Optional[str], fallback: datetime) -> str:
        """表示用タイムスタンプ（例: 2023-08-15 08:30）をISO時刻に変換。解釈できなければfallback"""
        try:
            return datetime.fromisoformat(value).astimezone().isoformat()
        except (TypeError, ValueError):
            return fallback.isoformat()

    @staticmethod
    def _check_content(text: str, image_data: Optional[str]) -> None:
        if not (text or "").strip() and not image_data:
            raise RecordValidationError("A record needs text or an image")

    def _next_id(self, conn: sqlite3.Connection) -> int:
        candidate = time.time_ns() // 1_000_000
        while conn.execute("SELECT 1 FROM records WHERE id = ?", (candidate,)).fetchone():
            candidate += 1
        return candidate

    def create(
        self,
        text: str,
        date: Optional[str] = None,
        image_data: Optional[str] = None,
    ) -> Record:
        self._check_content(text, image_data)
        record_date = validate_date(date) if date else date_type.today().isoformat()
        now = self._now()
        with self._connect() as conn:
            record_id = self._next_id(conn)
            conn.execute(
                """
                INSERT INTO records (id, text, timestamp, date, image_data, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    record_id,
                    text or "",
                    self._display(now),
                    record_date,
                    image_data,
                    now.isoformat(),
                    now.isoformat(),
                ),
            )
            conn.commit()
            row = conn.execute("SELECT * FROM records WHERE id = ?", (record_id,)).fetchone()
        return self._row_to_record(row)

    def get(self, record_id: int) -> Optional[Record]:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM records WHERE id = ?", (record_id,)).fetchone()
        return self._row_to_record(row) if row else None

    def list_all(self) -> list[Record]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM records ORDER BY date DESC, updated_at DESC, id DESC"
            ).fetchall()
        return [self._row_to_record(row) for row in rows]

    def list_by_date(self, date: str, newest_first: bool = True) -> list[Record]:
        """所属日で絞り込み、最終編集時刻順に並べる"""
        validate_date(date)
        direction = "DESC" if newest_first else "ASC"
        with self._connect() as conn:
            rows = conn.execute(
                f"SELECT * FROM records WHERE date = ? ORDER BY updated_at {direction}, id {direction}",
                (date,),
            ).fetchall()
        return [self._row_to_record(row) for row in rows]

    def dates_with_records(self) -> set[str]:
        with self._connect() as conn:
            rows = conn.execute("SELECT DISTINCT date FROM records").fetchall()
        return {row["date"] for row in rows}

    def edit_text(self, record_id: int, text: str) -> Optional[Record]:
        """本文を更新（表示タイムスタンプも更新、idは不変）"""
        existing = self.get(record_id)
        if not existing:
            return None
        self._check_content(text, existing.image_data)
        now = self._now()
        with self._connect() as conn:
            conn.execute(
                "UPDATE records SET text = ?, timestamp = ?, updated_at = ? WHERE id = ?",
                (text, self._display(now), now.isoformat(), record_id),
            )
            conn.commit()
        return self.get(record_id)

    def refile(self, record_id: int, date: str) -> Optional[Record]:
        """所属日を変更（タイムスタンプは変更しない）"""
        validate_date(date)
        with self._connect() as conn:
            cursor = conn.execute("UPDATE records SET date = ? WHERE id = ?", (date, record_id))
            conn.commit()
            if cursor.rowcount == 0:
                return None
        return self.get(record_id)

    def delete(self, record_id: int) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM records WHERE id = ?", (record_id,))
            conn.commit()
            return cursor.rowcount > 0

    def export(self) -> list[dict[str, Any]]:
        return [record.to_dict() for record in self.list_all()]

    def replace_all(self, items: Iterable[dict]) -> list[Record]:
        """全件を置き換える（インポート用）。1件でも不正なら何も変更しない。"""
        now = self._now()
        rows: list[tuple] = []
        seen: set[int] = set()
        for item in items:
            text = item.get("text") or ""
            image_data = item.get("image_data") or item.get("imageData")
            self._check_content(text, image_data)
            record_date = validate_date(item.get("date", ""))
            try:
                record_id = int(item["id"])
            except (KeyError, TypeError, ValueError) as exc:
                raise RecordValidationError(f"Invalid record id: {item.get('id')!r}") from exc
            if record_id in seen:
                raise RecordValidationError(f"Duplicate record id: {record_id}")
            seen.add(record_id)
            created_at = item.get("created_at") or self._instant_from_display(
                item.get("timestamp"), now
            )
            rows.append(
                (
                    record_id,
                    text,
                    item.get("timestamp") or self._display(now),
                    record_date,
                    image_data,
                    created_at,
                    item.get("updated_at") or created_at,
                )
            )

        with self._connect() as conn:
            conn.execute("DELETE FROM records")
            conn.executemany(
                """
                INSERT INTO records (id, text, timestamp, date, image_data, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                rows,
            )
            conn.commit()
        return self.list_all()
