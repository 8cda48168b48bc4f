"""
HTTP request/response models for the agent logbook API.
"""

from typing import List

from pydantic import BaseModel, StrictStr

from .log_models import ServerLogEntry


class WriteLogRequest(BaseModel):
    content: StrictStr


class ReadLogResponse(BaseModel):
    content: str


class WriteLogResponse(BaseModel):
    ok: bool = True


class SummarizeRequest(BaseModel):
    entries: StrictStr


class SummarizeResponse(BaseModel):
    summary: str


class ErrorResponse(BaseModel):
    error: str


class ServerLogsResponse(BaseModel):
    entries: List[ServerLogEntry]
