from __future__ import annotations

import re
from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, Dict, Optional

_TIME_OF_DAY = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
THEMES = ("light", "dark")


class SettingsError(ValueError):
    """不正な設定値"""


@dataclass(frozen=True)
class AppSettings:
    """ユーザー設定（イミュータブル）。変更はSettingsService.updateを経由する。"""

    sort_newest_first: bool = True
    reminder_enabled: bool = False
    reminder_time: str = "20:00"
    composer_at_top: bool = True
    time_24h: bool = False
    show_seconds: bool = False
    ai_summary_enabled: bool = True
    theme: str = "light"
    record_color: str = "#3b82f6"
    ai_enabled: bool = False
    ai_api_key: Optional[str] = None

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def to_dict(self, include_secrets: bool = False) -> Dict[str, Any]:
        data = {name: getattr(self, name) for name in self.field_names()}
        if not include_secrets:
            data["ai_api_key_set"] = bool(data.pop("ai_api_key"))
        return data


def validate_setting(name: str, value: Any) -> Any:
    """
    1項目の値を検証して正規化した値を返す

    Raises:
        SettingsError: 未知の項目、または不正な値
    """
    if name not in AppSettings.field_names():
        raise SettingsError(f"Unknown setting: {name}")

    if name == "reminder_time":
        if not isinstance(value, str) or not _TIME_OF_DAY.match(value):
            raise SettingsError(f"reminder_time must be HH:MM: {value!r}")
        return value
    if name == "theme":
        if value not in THEMES:
            raise SettingsError(f"theme must be one of {THEMES}: {value!r}")
        return value
    if name == "record_color":
        if not isinstance(value, str) or not _HEX_COLOR.match(value):
            raise SettingsError(f"record_color must be a hex color: {value!r}")
        return value
    if name == "ai_api_key":
        if value is None:
            return None
        if not isinstance(value, str):
            raise SettingsError("ai_api_key must be a string")
        return value.strip() or None

    if not isinstance(value, bool):
        raise SettingsError(f"{name} must be a boolean: {value!r}")
    return value


def format_timestamp(moment: datetime, settings: AppSettings) -> str:
    """表示設定（24時間表記・秒表示）に従ってタイムスタンプを整形"""
    seconds = ":%S" if settings.show_seconds else ""
    if settings.time_24h:
        time_format = f"%H:%M{seconds}"
    else:
        time_format = f"%I:%M{seconds} %p"
    return moment.strftime(f"%Y-%m-%d {time_format}")
