"""
Journal module for daily activity summaries and calendar views.

This module provides functionality for:
- Keyword-based activity classification
- Deterministic day summaries (with optional LLM summaries)
- Month calendar grids
"""

from src.journal.calendar_grid import CalendarCell, build_month_grid, month_label, shift_month
from src.journal.categories import CATEGORIES, Category, CategoryMatches, classify
from src.journal.summarizer import (
    EMPTY_DAY_SUMMARY,
    DaySummary,
    JournalSummarizer,
    analyze,
    summarize,
)

__all__ = [
    "CATEGORIES",
    "CalendarCell",
    "Category",
    "CategoryMatches",
    "DaySummary",
    "EMPTY_DAY_SUMMARY",
    "JournalSummarizer",
    "analyze",
    "build_month_grid",
    "classify",
    "month_label",
    "shift_month",
    "summarize",
]
