"""Operational endpoints: health check and the in-memory server log."""

from fastapi import APIRouter

from ..models.api_models import ServerLogsResponse
from ..oplog.server_log import server_log


router = APIRouter()


# --------------------------------------------------------
# Endpoint: GET /api/health
# --------------------------------------------------------
@router.get("/health")
def health_check():
    """
    Simple health check endpoint for uptime monitoring.
    """
    return {"status": "ok"}


# --------------------------------------------------------
# Endpoint: GET /api/server-logs
# --------------------------------------------------------
@router.get("/server-logs", response_model=ServerLogsResponse)
def list_server_logs() -> ServerLogsResponse:
    """Return the current operational log buffer, oldest first."""
    return ServerLogsResponse(entries=server_log.entries())
