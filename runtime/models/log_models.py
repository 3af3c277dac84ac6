"""
Core log models for the applog runtime.

These describe:
- a LogRecord (one stored line plus the application it belongs to)
- LevelMatch enum (SUBSTRING, EXACT) used by the query reader
"""

from enum import Enum

from pydantic import BaseModel


class LevelMatch(str, Enum):
    # Literal containment anywhere in the raw line (the compatible default).
    SUBSTRING = "substring"
    # Decoded log_level must equal the filter.
    EXACT = "exact"


class LogRecord(BaseModel):
    application_id: str = ""  # not part of the stored line
    log_level: str
    timestamp: str
    log_message: str
