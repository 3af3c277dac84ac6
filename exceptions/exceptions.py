"""
Custom exceptions for the applog store and API.

These exceptions are intentionally simple and descriptive.
They are used across:

  - runtime/store/
  - runtime/api/
  - cli/

Placing them at the project root (applog/exceptions/) avoids
circular imports and keeps exception types consistent across modules.
"""

from typing import Optional


class StoreError(Exception):
    """
    Raised when the on-disk log store cannot be read or written.

    Covers directory creation, file open, read, write and listing failures,
    including querying an application that has never logged anything
    (its directory does not exist).

    The underlying OSError, if any, is chained as __cause__.
    """

    def __init__(self, message: str, application_id: Optional[str] = None):
        self.application_id = application_id
        super().__init__(message)


class LineFormatError(ValueError):
    """
    Raised when a stored line cannot be decoded into a LogRecord.

    Example:
        '[2024-01-01T00:00:00Z] [INFO]: started'  ← expected
        'garbage without separators'              ← raises this exception
    """

    def __init__(self, line, details=None):
        self.line = line
        self.details = details or "Invalid log line format."
        msg = f"Cannot decode log line: {line!r}\nDetails: {self.details}"
        super().__init__(msg)
