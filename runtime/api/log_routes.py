"""HTTP routes for reading and writing per-agent logs.

Exposes:

- GET  /api/logs/{agent_id}   -> {"content": str} (chronological log)
- POST /api/logs/{agent_id}   -> {"ok": true}, body {"content": str}
- GET  /api/goals/{agent_id}  -> {"content": str} (goal log)
- POST /api/goals/{agent_id}  -> {"ok": true}, body {"content": str}

A log that was never written reads back as {"content": ""}. Other methods
on these paths get 405 from FastAPI's method routing.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from starlette.concurrency import run_in_threadpool

from core.validation.identifiers import validate_agent_id

from ..models.api_models import ReadLogResponse, WriteLogRequest, WriteLogResponse
from ..models.log_models import LogKind
from ..store.log_store import LogStore
from .request_body import parse_json_body


logger = logging.getLogger(__name__)

# Router for all log endpoints
router = APIRouter()


def get_log_store(request: Request) -> LogStore:
    """Return the LogStore attached to this app by create_app."""
    store = getattr(request.app.state, "log_store", None)
    if store is None:
        raise HTTPException(
            status_code=500,
            detail="LogStore is not configured on the server.",
        )
    return store


async def _read_log(store: LogStore, agent_id: str, kind: LogKind) -> ReadLogResponse:
    validate_agent_id(agent_id)
    content = await run_in_threadpool(store.read, agent_id, kind)
    return ReadLogResponse(content=content)


async def _write_log(
    request: Request, store: LogStore, agent_id: str, kind: LogKind
) -> WriteLogResponse:
    validate_agent_id(agent_id)
    body = await parse_json_body(request, WriteLogRequest, "content")
    await run_in_threadpool(store.write, agent_id, kind, body.content)
    logger.info(
        "[LOGS] %s log for %s replaced (%d chars)",
        kind.value,
        agent_id,
        len(body.content),
        extra={"tag": "logs"},
    )
    return WriteLogResponse(ok=True)


# The ":path" converter lets values such as "../etc" reach the validator
# (and get a 400) instead of silently falling through to a 404.

@router.get("/logs/{agent_id:path}", response_model=ReadLogResponse)
async def read_chronological_log(
    agent_id: str, store: LogStore = Depends(get_log_store)
) -> ReadLogResponse:
    """Return the agent's chronological log."""
    return await _read_log(store, agent_id, LogKind.CHRONOLOGICAL)


@router.post("/logs/{agent_id:path}", response_model=WriteLogResponse)
async def write_chronological_log(
    agent_id: str, request: Request, store: LogStore = Depends(get_log_store)
) -> WriteLogResponse:
    """Replace the agent's chronological log with the posted content."""
    return await _write_log(request, store, agent_id, LogKind.CHRONOLOGICAL)


@router.get("/goals/{agent_id:path}", response_model=ReadLogResponse)
async def read_goal_log(
    agent_id: str, store: LogStore = Depends(get_log_store)
) -> ReadLogResponse:
    """Return the agent's goal log."""
    return await _read_log(store, agent_id, LogKind.GOALS)


@router.post("/goals/{agent_id:path}", response_model=WriteLogResponse)
async def write_goal_log(
    agent_id: str, request: Request, store: LogStore = Depends(get_log_store)
) -> WriteLogResponse:
    """Replace the agent's goal log with the posted content."""
    return await _write_log(request, store, agent_id, LogKind.GOALS)
