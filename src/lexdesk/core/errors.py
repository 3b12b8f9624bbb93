"""
Exceptions raised by the core layer.

None of these are fatal to the process: workflows catch them and degrade to
a user-visible notification.
"""

from typing import Optional


class LexdeskError(Exception):
    """Base class for all application errors."""


class ValidationError(LexdeskError):
    """A record or partial update was rejected at the store boundary."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field
        """Name of the offending field, if the error concerns a single field."""


class ImportParseError(LexdeskError):
    """An import document could not be parsed into the six collections."""
