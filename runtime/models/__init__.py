"""
Pydantic models used by the agent logbook runtime.

Split into:
- log_models: LogKind + LogRecord + ServerLogEntry
- api_models: HTTP request/response schemas
"""
