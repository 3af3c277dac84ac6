"""HTTP routes for pushing and reading application logs.

Exposes endpoints like:

- POST /upload -> takes (application_id, log_level, timestamp, log_message)
                  and appends one line to today's partition
- GET  /query  -> takes (application_id, log_level, limit, match)
                  and returns the decoded matching records
- GET  /healthz
"""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from typing import Optional

from exceptions.exceptions import StoreError
from ..models.api_models import (
    ErrorResponse,
    QueryResponse,
    UploadRequest,
    UploadResponse,
    check_application_id,
)
from ..models.log_models import LevelMatch
from ..store.log_store import DEFAULT_QUERY_LIMIT, LogStore


logger = logging.getLogger(__name__)

# Router for all log endpoints
router = APIRouter()


def init_routes(app, log_store: LogStore, default_limit: int = DEFAULT_QUERY_LIMIT) -> None:
    """Attach the store used by the route handlers to one app.

    State lives on ``app.state`` so several apps (tests, the uvicorn app)
    can each serve their own store.
    """
    app.state.log_store = log_store
    app.state.default_limit = default_limit


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


def _require_log_store(request: Request) -> LogStore:
    store = getattr(request.app.state, "log_store", None)
    if store is None:
        raise RuntimeError("LogStore is not configured on the server.")
    return store


def parse_limit(raw: Optional[str], default: int = DEFAULT_QUERY_LIMIT) -> int:
    """Parse the ``limit`` query parameter.

    Missing, unparseable and non-positive values fall back to ``default``
    instead of being rejected.
    """
    if raw is None:
        return default
    try:
        limit = int(raw)
    except ValueError:
        return default
    if limit <= 0:
        return default
    return limit


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def upload_log(body: UploadRequest, request: Request):
    """Append one log line for an application.

    Request validation happens in UploadRequest; a malformed body never
    reaches this handler (see the RequestValidationError handler in
    server.py).
    """
    store = _require_log_store(request)
    try:
        store.append(body.to_record())
    except StoreError:
        # Paths stay in the server log, never in the response.
        logger.exception(
            "[API] upload failed for application_id=%s level=%s",
            body.application_id,
            body.log_level,
        )
        return _error(500, "Unable to write log to file")

    return UploadResponse(message="Log uploaded successfully")


@router.get(
    "/query",
    response_model=QueryResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def query_logs(
    request: Request,
    application_id: Optional[str] = None,
    log_level: Optional[str] = None,
    limit: Optional[str] = None,
    match: Optional[str] = None,
):
    """Return decoded records of an application whose line mentions ``log_level``.

    ``match=exact`` switches from the default substring selection to an
    exact comparison against the decoded level.
    """
    if not application_id or not log_level:
        logger.warning(
            "[API] HTTP 400 for query application_id=%r log_level=%r",
            application_id,
            log_level,
        )
        return _error(400, "application_id and log_level are required")

    try:
        check_application_id(application_id)
    except ValueError as e:
        logger.warning("[API] HTTP 400 for query application_id=%r reason=%s", application_id, e)
        return _error(400, str(e))

    try:
        level_match = LevelMatch(match) if match else LevelMatch.SUBSTRING
    except ValueError:
        return _error(400, f"match must be one of: {', '.join(m.value for m in LevelMatch)}")

    store = _require_log_store(request)
    default_limit = getattr(request.app.state, "default_limit", DEFAULT_QUERY_LIMIT)
    try:
        logs = store.query(
            application_id,
            log_level,
            limit=parse_limit(limit, default_limit),
            match=level_match,
        )
    except StoreError:
        logger.exception(
            "[API] query failed for application_id=%s log_level=%s",
            application_id,
            log_level,
        )
        return _error(500, "Unable to read application logs")

    return QueryResponse(
        application_id=application_id,
        log_level=log_level,
        logs=logs,
    )


# --------------------------------------------------------
# Endpoint: GET /healthz
# --------------------------------------------------------
@router.get("/healthz")
def health_check():
    """
    Simple health check endpoint for uptime monitoring.
    """
    return {"status": "ok"}
