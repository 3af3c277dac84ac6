from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv


load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}")


class Settings:
    """
    Central configuration for applog.

    Values are loaded once from environment variables (with sensible defaults)
    and then exposed via typed properties.
    """

    def __init__(self) -> None:
        # Where partitions live: <store_root>/<application_id>/<YYYY-MM-DD>.log
        self._store_root = Path(os.getenv("APPLOG_STORE_ROOT", "logs"))

        # HTTP server
        self._host = os.getenv("APPLOG_HOST", "0.0.0.0")
        self._port = _int_env("APPLOG_PORT", 8080)

        # Process logging
        self._log_level = os.getenv("APPLOG_LOG_LEVEL", "INFO").upper()

        # Query defaults
        self._default_limit = _int_env("APPLOG_DEFAULT_LIMIT", 100)

    # ------------------------------------------------------------------
    # Store
    # ------------------------------------------------------------------

    @property
    def store_root(self) -> Path:
        return self._store_root

    @property
    def default_limit(self) -> int:
        return self._default_limit

    # ------------------------------------------------------------------
    # Server
    # ------------------------------------------------------------------

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int:
        return self._port

    @property
    def log_level(self) -> str:
        return self._log_level


settings = Settings()
