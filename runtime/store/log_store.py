"""LogStore: append-only, partitioned log storage on the local filesystem.

Writes one text line per record to:

    <store_root>/<application_id>/<YYYY-MM-DD>.log

and reads them back filtered by level. Directories and daily files are
created lazily by ``append``; nothing here ever deletes or rewrites them.

There is no locking. Each ``append`` is a single write of one short line
to a file opened in append mode, and concurrent writers rely on that.
"""

import logging
import os
from datetime import date
from pathlib import Path
from typing import Callable, List, Optional, Union

from exceptions.exceptions import LineFormatError, StoreError
from ..models.log_models import LevelMatch, LogRecord
from .log_format import (
    decode_line,
    encode_line,
    line_contains_level,
    partition_dir,
    partition_path,
)


logger = logging.getLogger(__name__)

DEFAULT_QUERY_LIMIT = 100


class LogStore:
    """Ingest writer and query reader over one store root.

    Parameters
    ----------
    store_root:
        Directory that holds one sub-directory per application.
        Defaults to "logs" (relative to the current working directory).
    clock:
        Callable returning the current local date. It picks the partition
        file for ``append``. Defaults to ``date.today``.
    """

    def __init__(
        self,
        store_root: Union[str, Path] = "logs",
        clock: Optional[Callable[[], date]] = None,
    ) -> None:
        self.store_root = Path(store_root)
        self._clock = clock or date.today

    # ------------------------------------------------------------------
    # Ingest
    # ------------------------------------------------------------------

    def append(self, record: LogRecord) -> Path:
        """Append one record to today's partition for its application.

        Returns the partition path that was written.

        Raises
        ------
        StoreError
            If the directory cannot be created or the line cannot be
            written. There is no retry.
        """
        app_dir = partition_dir(self.store_root, record.application_id)
        path = partition_path(self.store_root, record.application_id, self._clock())

        try:
            app_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StoreError(
                "Unable to create application folder",
                application_id=record.application_id,
            ) from exc

        line = encode_line(record)
        try:
            with path.open("a", encoding="utf-8", newline="\n") as f:
                f.write(line)
        except OSError as exc:
            raise StoreError(
                "Unable to write log to file",
                application_id=record.application_id,
            ) from exc

        logger.debug("[STORE] appended %s line to %s", record.log_level, path)
        return path

    # ------------------------------------------------------------------
    # Query
    # ------------------------------------------------------------------

    def list_partitions(self, application_id: str) -> List[Path]:
        """Return the partition files of an application in filename order.

        Sub-directories are skipped, not recursed into. Filenames are
        YYYY-MM-DD.log, so filename order is chronological.

        An application without a directory is an error, not an empty
        result: it cannot be told apart from an unreadable store.

        Raises
        ------
        StoreError
            If the application directory is missing or cannot be listed.
        """
        app_dir = partition_dir(self.store_root, application_id)
        try:
            with os.scandir(app_dir) as entries:
                names = sorted(entry.name for entry in entries if not entry.is_dir())
        except OSError as exc:
            raise StoreError(
                "Unable to read application logs",
                application_id=application_id,
            ) from exc
        return [app_dir / name for name in names]

    def query(
        self,
        application_id: str,
        level: str,
        limit: Optional[int] = DEFAULT_QUERY_LIMIT,
        match: LevelMatch = LevelMatch.SUBSTRING,
    ) -> List[LogRecord]:
        """Return up to ``limit`` records of an application matching ``level``.

        Records come back oldest partition first, in line order within
        each partition; truncation keeps the earliest ones.

        With ``LevelMatch.SUBSTRING`` a line is selected when ``level``
        appears anywhere in it, so "ERR" selects "ERROR" lines and a level
        mentioned in a message selects that line too. ``LevelMatch.EXACT``
        additionally requires the decoded level to equal ``level``.

        Lines that do not decode are skipped.

        Raises
        ------
        StoreError
            If the application directory or any partition cannot be read.
            No partial result is returned.
        """
        if limit is None or limit <= 0:
            limit = DEFAULT_QUERY_LIMIT

        records: List[LogRecord] = []
        for path in self.list_partitions(application_id):
            records.extend(self._scan_partition(path, application_id, level, match))

        return records[:limit]

    def _scan_partition(
        self,
        path: Path,
        application_id: str,
        level: str,
        match: LevelMatch,
    ) -> List[LogRecord]:
        records: List[LogRecord] = []
        try:
            with path.open("r", encoding="utf-8", errors="replace", newline="\n") as f:
                for line in f:
                    if not line_contains_level(line.rstrip("\r\n"), level):
                        continue
                    try:
                        record = decode_line(line, application_id=application_id)
                    except LineFormatError as exc:
                        logger.debug("[STORE] skipping line in %s: %s", path, exc.details)
                        continue
                    if match == LevelMatch.EXACT and record.log_level != level:
                        continue
                    records.append(record)
        except OSError as exc:
            raise StoreError(
                "Unable to read log file",
                application_id=application_id,
            ) from exc
        return records

    # ------------------------------------------------------------------
    # Browsing
    # ------------------------------------------------------------------

    def list_applications(self) -> List[str]:
        """Return the ids of applications that have logged at least once.

        A store root that does not exist yet simply has no applications.
        """
        if not self.store_root.is_dir():
            return []
        try:
            with os.scandir(self.store_root) as entries:
                return sorted(entry.name for entry in entries if entry.is_dir())
        except OSError as exc:
            raise StoreError("Unable to list applications") from exc
