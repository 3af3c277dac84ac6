#!/usr/bin/env python3
"""
applog CLI

Local access to the partitioned log store plus a launcher for the HTTP API.

Commands:

1) serve
   - Run the FastAPI app with uvicorn:
       POST /upload, GET /query, GET /healthz

2) upload
   - Append one record directly to:
       <store_root>/<app_id>/<YYYY-MM-DD>.log

3) query
   - Print the records of an app matching a level, as JSON.

4) apps
   - List the application ids present in the store.
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from datetime import datetime
from pathlib import Path

# Ensure project root is on sys.path when running as a script
ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from pydantic import ValidationError

from configs.settings import settings
from exceptions.exceptions import StoreError
from runtime.models.api_models import UploadRequest
from runtime.models.log_models import LevelMatch
from runtime.store.log_store import LogStore


# ---------------------------------------------------------------------------
# serve
# ---------------------------------------------------------------------------


def cmd_serve(store_root: str, host: str, port: int, reload: bool) -> None:
    """Start the HTTP API on ``store_root``.

    With --reload uvicorn imports the app by name in a fresh worker process,
    so the store root is also handed over through APPLOG_STORE_ROOT.
    """
    os.environ["APPLOG_STORE_ROOT"] = store_root

    # Lazy import so store-only commands work without uvicorn.
    import uvicorn

    print(f"[applog] Serving on {host}:{port} (store: {store_root})")
    if reload:
        uvicorn.run("runtime.api.server:app", host=host, port=port, reload=True)
        return

    from runtime.api.server import create_app

    uvicorn.run(create_app(store_root=store_root), host=host, port=port)


# ---------------------------------------------------------------------------
# upload / query / apps – direct store access
# ---------------------------------------------------------------------------


def cmd_upload(store: LogStore, app_id: str, level: str, message: str, timestamp: str | None) -> int:
    """
    Validate and append one record, exactly as POST /upload would.
    """
    try:
        request = UploadRequest(
            application_id=app_id,
            log_level=level,
            timestamp=timestamp or datetime.now().astimezone().isoformat(),
            log_message=message,
        )
    except ValidationError as e:
        print(f"[applog] Invalid record: {e}", file=sys.stderr)
        return 2

    try:
        path = store.append(request.to_record())
    except StoreError as e:
        print(f"[applog] {e}", file=sys.stderr)
        return 1

    print(f"[applog] ✓ 1 line appended → {path}")
    return 0


def cmd_query(store: LogStore, app_id: str, level: str, limit: int, exact: bool) -> int:
    match = LevelMatch.EXACT if exact else LevelMatch.SUBSTRING
    try:
        records = store.query(app_id, level, limit=limit, match=match)
    except StoreError as e:
        print(f"[applog] {e} (application_id={app_id})", file=sys.stderr)
        return 1

    payload = {
        "application_id": app_id,
        "log_level": level,
        "logs": [record.model_dump() for record in records],
    }
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


def cmd_apps(store: LogStore) -> int:
    try:
        apps = store.list_applications()
    except StoreError as e:
        print(f"[applog] {e}", file=sys.stderr)
        return 1

    for app_id in apps:
        print(app_id)
    return 0


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="applog CLI")
    parser.add_argument(
        "--store-root",
        default=str(settings.store_root),
        help="Log store directory (default: APPLOG_STORE_ROOT or 'logs')",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # serve
    p_serve = subparsers.add_parser("serve", help="Run the HTTP API")
    p_serve.add_argument("--host", default=settings.host)
    p_serve.add_argument("--port", type=int, default=settings.port)
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")

    # upload
    p_upload = subparsers.add_parser("upload", help="Append one record to the store")
    p_upload.add_argument("app_id", help="Application ID (folder name under the store root)")
    p_upload.add_argument("level", help="Log level, e.g. INFO")
    p_upload.add_argument("message", help="Log message (single line)")
    p_upload.add_argument("--timestamp", default=None, help="Timestamp text (default: now, ISO-8601)")

    # query
    p_query = subparsers.add_parser("query", help="Print records of an app matching a level")
    p_query.add_argument("app_id", help="Application ID (folder name under the store root)")
    p_query.add_argument("level", help="Level filter (substring match unless --exact)")
    p_query.add_argument("--limit", type=int, default=settings.default_limit)
    p_query.add_argument("--exact", action="store_true", help="Require the decoded level to equal LEVEL")

    # apps
    subparsers.add_parser("apps", help="List application ids present in the store")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    command: str = args.command
    store = LogStore(store_root=args.store_root)

    if command == "serve":
        cmd_serve(store_root=args.store_root, host=args.host, port=args.port, reload=args.reload)
        return 0
    elif command == "upload":
        return cmd_upload(store, args.app_id, args.level, args.message, args.timestamp)
    elif command == "query":
        return cmd_query(store, args.app_id, args.level, args.limit, args.exact)
    elif command == "apps":
        return cmd_apps(store)
    else:
        parser.error(f"Unknown command: {command}")
    return 2


if __name__ == "__main__":
    sys.exit(main())
