"""
HTTP request/response models for the applog API.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .log_models import LogRecord


# Substrings that would make a stored line decode differently.
SEPARATORS = ("] [", ": ")


def check_application_id(value: str) -> str:
    """Reject ids that are not a single plain directory name."""
    if value in (".", "..") or "/" in value or "\\" in value or "\x00" in value:
        raise ValueError("application_id must be a plain name without path separators")
    return value


class UploadRequest(BaseModel):
    """
    Body of POST /upload.

    Every field is a required, non-empty string. Fields end up on a single
    line on disk, so newlines are rejected everywhere, and the two
    bracketed fields may not contain the line separators.
    """

    model_config = ConfigDict(strict=True)

    application_id: str = Field(min_length=1)
    log_level: str = Field(min_length=1)
    timestamp: str = Field(min_length=1)
    log_message: str = Field(min_length=1)

    @field_validator("application_id", "log_level", "timestamp", "log_message")
    @classmethod
    def _single_line(cls, value: str) -> str:
        if "\n" in value:
            raise ValueError("must not contain a newline")
        return value

    @field_validator("log_level", "timestamp")
    @classmethod
    def _no_separators(cls, value: str) -> str:
        for sep in SEPARATORS:
            if sep in value:
                raise ValueError(f"must not contain {sep!r}")
        return value

    @field_validator("application_id")
    @classmethod
    def _safe_application_id(cls, value: str) -> str:
        return check_application_id(value)

    def to_record(self) -> LogRecord:
        return LogRecord(**self.model_dump())


class UploadResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str


class QueryResponse(BaseModel):
    application_id: str
    log_level: str
    logs: List[LogRecord]
