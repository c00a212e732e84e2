"""Exceptions raised by the record store."""


class RecordError(Exception):
    """Base class for record store errors."""


class RecordValidationError(RecordError, ValueError):
    """Raised when a record would violate the store invariants."""
