"""
月間カレンダーグリッド生成

7列（日曜始まり）のフラットなセル列を返す。先頭は月初の曜日分だけNoneで埋める。
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import AbstractSet, List, Optional, Tuple


@dataclass(frozen=True)
class CalendarCell:
    """カレンダーの1日分"""

    day: int
    date: str  # YYYY-MM-DD
    has_records: bool


def first_weekday_offset(year: int, month: int) -> int:
    """月初の曜日インデックス（0=日曜）"""
    # date.weekday() は 0=月曜
    return (date(year, month, 1).weekday() + 1) % 7


def build_month_grid(
    year: int, month: int, dates_with_records: AbstractSet[str]
) -> List[Optional[CalendarCell]]:
    """
    月間カレンダーグリッドを生成する

    Args:
        year: 西暦年
        month: 月（1-12）
        dates_with_records: 記録が存在する日付文字列（YYYY-MM-DD）の集合

    Returns:
        先頭パディングのNoneと、各日のCalendarCellからなるリスト
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12: {month}")

    cells: List[Optional[CalendarCell]] = [None] * first_weekday_offset(year, month)
    days_in_month = calendar.monthrange(year, month)[1]
    for day in range(1, days_in_month + 1):
        iso = f"{year:04d}-{month:02d}-{day:02d}"
        cells.append(CalendarCell(day=day, date=iso, has_records=iso in dates_with_records))
    return cells


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """前月/翌月への移動（deltaは負数可）"""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_label(year: int, month: int) -> str:
    """例: "August 2023" """
    return f"{calendar.month_name[month]} {year}"
