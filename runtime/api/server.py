"""
FastAPI application entry point for the agent logbook runtime.

Responsibilities:
- construct the LogStore and Summarizer from Settings and keep them on app.state
- render every error as {"error": "<message>"} with its mapped status
- include the log, summarize and system routes under /api

Run locally with:

    uvicorn runtime.api.server:app --reload
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from configs.settings import Settings, settings as default_settings
from core.summarizer.summarizer import Summarizer
from exceptions.exceptions import LogbookError
from runtime.models.api_models import ErrorResponse
from runtime.oplog.server_log import install_server_log
from runtime.store.log_store import LogStore
from . import log_routes, summarize_routes, system_routes


logger = logging.getLogger(__name__)


async def _logbook_error_handler(request: Request, exc: LogbookError) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "[API] HTTP %s for %s %s reason=%r",
        exc.status_code,
        request.method,
        request.url.path,
        exc.message,
        extra={"tag": "api"},
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.message).model_dump(),
    )


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=str(exc.detail)).model_dump(),
        headers=getattr(exc, "headers", None),
    )


def create_app(
    settings: Optional[Settings] = None,
    log_store: Optional[LogStore] = None,
    summarizer: Optional[Summarizer] = None,
) -> FastAPI:
    """Build the FastAPI app and attach its shared objects to app.state.

    Each app keeps its own store and summarizer; route handlers look them
    up through the request, so several apps can live in one process.
    """
    settings = settings or default_settings

    install_server_log(settings.log_level)

    # Log storage: one markdown file per (agent, kind) under logs_dir.
    log_store = log_store or LogStore(logs_dir=settings.logs_dir)

    # Summarizer: the OpenAI client is only built once a credential exists.
    summarizer = summarizer or Summarizer(settings)

    app = FastAPI(title="Agent Logbook")
    app.add_exception_handler(LogbookError, _logbook_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)

    # Shared objects for the route dependencies, then the routers themselves.
    app.state.log_store = log_store
    app.state.summarizer = summarizer

    app.include_router(log_routes.router, prefix="/api")
    app.include_router(summarize_routes.router, prefix="/api")
    app.include_router(system_routes.router, prefix="/api")

    logger.info(
        "[API] logbook ready, logs_dir=%s summarizer_configured=%s",
        log_store.logs_dir,
        summarizer.is_configured,
        extra={"tag": "api"},
    )
    return app


app = create_app()
