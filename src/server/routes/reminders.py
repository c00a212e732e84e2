"""Reminder notification endpoints."""

from __future__ import annotations

from fastapi import FastAPI

from ..dependencies import get_reminder_scheduler
from ..schemas import ReminderPendingResponse


def register_reminder_routes(app: FastAPI) -> None:
    """Register reminder polling endpoint."""

    @app.get("/api/reminders/pending", response_model=ReminderPendingResponse)
    async def get_pending_reminders() -> ReminderPendingResponse:
        """Drain queued reminder notifications."""
        scheduler = get_reminder_scheduler()
        notifications = scheduler.get_pending_notifications()
        status = scheduler.get_status()
        return ReminderPendingResponse(
            notifications=notifications,
            enabled=status["enabled"],
            reminder_time=status["reminder_time"],
            next_fire=status["next_fire"],
        )
