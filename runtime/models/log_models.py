"""
Log-related models for the agent logbook runtime.

These describe:
- LogKind enum (CHRONOLOGICAL, GOALS), whose value is the file prefix
- LogRecord: one stored log blob for an (agent_id, kind) pair
- ServerLogEntry: one operational log line held in memory
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel


class LogKind(str, Enum):
    CHRONOLOGICAL = "chronological"
    GOALS = "goals"


class LogRecord(BaseModel):
    agent_id: str
    kind: LogKind
    content: str = ""  # opaque markdown, never parsed by the store


class ServerLogEntry(BaseModel):
    timestamp: float   # epoch seconds
    level: str         # "info", "warn" or "error"
    tag: str
    message: str
    metadata: Optional[Dict[str, Any]] = None
