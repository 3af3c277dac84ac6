"""
FastAPI application entry point for the applog runtime.

Responsibilities:
- create the FastAPI app
- construct the shared LogStore
- map request validation failures to 400 responses
- log every request
- include the log routes

Run locally with:

    uvicorn runtime.api.server:app --reload
"""

import logging
import time
from pathlib import Path
from typing import Optional, Union

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from configs.settings import settings
from runtime.store.log_store import LogStore
from . import log_routes


logger = logging.getLogger(__name__)


def configure_logging(level: Optional[str] = None) -> None:
    """Apply the process-wide log level (APPLOG_LOG_LEVEL by default)."""
    logging.basicConfig(
        level=level or settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _describe_validation_error(exc: RequestValidationError) -> str:
    problems = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        problems.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return "Invalid JSON format or missing required fields" + (
        " (" + "; ".join(problems) + ")" if problems else ""
    )


def create_app(store_root: Optional[Union[str, Path]] = None, store: Optional[LogStore] = None) -> FastAPI:
    """Build the FastAPI app around a LogStore.

    ``store`` wins over ``store_root``; with neither, the store lives at
    APPLOG_STORE_ROOT.
    """
    if store is None:
        store = LogStore(store_root=store_root or settings.store_root)

    app = FastAPI(title="applog")

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        message = _describe_validation_error(exc)
        logger.warning("[API] HTTP 400 for %s %s reason=%s", request.method, request.url.path, message)
        return JSONResponse(status_code=400, content={"error": message})

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "[API] %s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
        )
        return response

    # Bind our store to this app, then include the routes.
    log_routes.init_routes(app, log_store=store, default_limit=settings.default_limit)
    app.include_router(log_routes.router)
    return app


# ---------------------------------------------------------------------------
# Shared app for uvicorn
# ---------------------------------------------------------------------------

configure_logging()
app = create_app()
