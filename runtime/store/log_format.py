"""Line format and partition layout shared by the writer and the reader.

Expected layout (by convention):

    <store_root>/<application_id>/<YYYY-MM-DD>.log

Each line in a partition file looks like:

    [<timestamp>] [<log_level>]: <log_message>

Everything here is a pure function of its arguments. Paths are resolved
fresh on every call; nothing is cached between requests.
"""

from datetime import date
from pathlib import Path
from typing import Union

from exceptions.exceptions import LineFormatError
from ..models.log_models import LogRecord


PARTITION_SUFFIX = ".log"

MESSAGE_SEPARATOR = ": "
META_SEPARATOR = "] ["


def partition_dir(root: Union[str, Path], application_id: str) -> Path:
    """Return the directory holding all partitions for an application."""
    return Path(root) / application_id


def partition_path(root: Union[str, Path], application_id: str, day: date) -> Path:
    """Return the partition file for an application on a given day."""
    return partition_dir(root, application_id) / f"{day.isoformat()}{PARTITION_SUFFIX}"


def encode_line(record: LogRecord) -> str:
    """Encode a record as one newline-terminated line."""
    return f"[{record.timestamp}] [{record.log_level}]: {record.log_message}\n"


def decode_line(line: str, application_id: str = "") -> LogRecord:
    """Decode one stored line back into a LogRecord.

    The message is everything after the first ": ", so messages that
    themselves contain ": " survive intact. The metadata prefix is split at
    the first "] [" and brackets are trimmed from both halves.

    Raises
    ------
    LineFormatError
        If either separator is missing.
    """
    line = line.rstrip("\r\n")

    meta, sep, message = line.partition(MESSAGE_SEPARATOR)
    if not sep:
        raise LineFormatError(line, f"missing {MESSAGE_SEPARATOR!r} separator")

    timestamp, sep, level = meta.partition(META_SEPARATOR)
    if not sep:
        raise LineFormatError(line, f"missing {META_SEPARATOR!r} separator")

    return LogRecord(
        application_id=application_id,
        log_level=level.strip("[]"),
        timestamp=timestamp.strip("[]"),
        log_message=message,
    )


def line_contains_level(line: str, level: str) -> bool:
    """Loose selection: ``level`` appears anywhere in the raw line, message included."""
    return level in line
