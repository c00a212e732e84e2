"""Day summary and calendar endpoints."""

from __future__ import annotations

import asyncio
import logging

from fastapi import FastAPI, HTTPException

from src.journal import build_month_grid, month_label, shift_month
from src.records import RecordValidationError, validate_date

from ..dependencies import get_journal_summarizer, get_record_repository
from ..schemas import CalendarCellResponse, CalendarResponse, DaySummaryResponse, MonthRef

logger = logging.getLogger(__name__)


def register_journal_routes(app: FastAPI) -> None:
    """Register day summary and month calendar endpoints."""

    @app.get("/api/days/{day}/summary", response_model=DaySummaryResponse)
    async def get_day_summary(day: str) -> DaySummaryResponse:
        """Summarize the records filed under one day."""
        try:
            validate_date(day)
        except RecordValidationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        summarizer = get_journal_summarizer()
        try:
            result = await asyncio.to_thread(summarizer.generate_daily_summary, day)
            return DaySummaryResponse(**result)
        except Exception as exc:
            logger.exception("Failed to summarize %s: %s", day, exc)
            raise HTTPException(status_code=500, detail="Failed to build summary") from exc

    @app.get("/api/calendar/{year}/{month}", response_model=CalendarResponse)
    async def get_calendar(year: int, month: int) -> CalendarResponse:
        """Month grid flagging the days that have records."""
        if not 1 <= month <= 12 or not 1 <= year <= 9999:
            raise HTTPException(status_code=400, detail="Invalid year or month")

        repo = get_record_repository()
        try:
            dates = await asyncio.to_thread(repo.dates_with_records)
        except Exception as exc:
            logger.exception("Failed to load calendar dates: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to build calendar") from exc

        cells = [
            CalendarCellResponse(day=cell.day, date=cell.date, has_records=cell.has_records)
            if cell
            else None
            for cell in build_month_grid(year, month, dates)
        ]
        prev_year, prev_month = shift_month(year, month, -1)
        next_year, next_month = shift_month(year, month, 1)
        return CalendarResponse(
            year=year,
            month=month,
            label=month_label(year, month),
            cells=cells,
            previous=MonthRef(year=prev_year, month=prev_month),
            next=MonthRef(year=next_year, month=next_month),
        )
