"""
Storage abstractions for the agent logbook runtime.

Includes:
- LogStore: whole-file storage of per-agent chronological and goal logs
"""
