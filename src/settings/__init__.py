"""User settings: immutable values with a single update interface."""

from .models import AppSettings, SettingsError, format_timestamp, validate_setting
from .service import SettingsService

__all__ = [
    "AppSettings",
    "SettingsError",
    "SettingsService",
    "format_timestamp",
    "validate_setting",
]
