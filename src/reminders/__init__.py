"""Daily journaling reminders."""

from .scheduler import REMINDER_BODY, REMINDER_TITLE, ReminderScheduler, next_reminder_at

__all__ = ["REMINDER_BODY", "REMINDER_TITLE", "ReminderScheduler", "next_reminder_at"]
