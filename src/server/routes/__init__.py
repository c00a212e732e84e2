"""Route registration helpers."""

from .assistant import register_assistant_routes
from .journal import register_journal_routes
from .records import register_record_routes
from .reminders import register_reminder_routes
from .settings import register_settings_routes

__all__ = [
    "register_assistant_routes",
    "register_journal_routes",
    "register_record_routes",
    "register_reminder_routes",
    "register_settings_routes",
]
