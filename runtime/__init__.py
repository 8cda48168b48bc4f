"""
Runtime package for the agent logbook server.

This package contains:
- API layer (FastAPI app factory + routes)
- Stores (per-agent chronological and goal logs)
- Models (Pydantic schemas for records and HTTP payloads)
- Operational log (in-memory ring buffer of recent server log entries)
"""
