"""Record storage shared across the API, the CLI and the summarizer."""

from .exceptions import RecordError, RecordValidationError
from .models import Record
from .repository import RecordRepository, default_timestamp_format, validate_date

__all__ = [
    "Record",
    "RecordError",
    "RecordRepository",
    "RecordValidationError",
    "default_timestamp_format",
    "validate_date",
]
