from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(slots=True)
class Record:
    """永続化済みの記録1件。

    dateは記録の所属日（再分類可能）、timestampは作成/最終編集時刻の表示用文字列。
    """

    id: int  # 作成時刻（ミリ秒）
    text: str
    timestamp: str
    date: str  # YYYY-MM-DD
    image_data: Optional[str] = None
    created_at: str = ""  # ISO8601
    updated_at: str = ""  # ISO8601

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
