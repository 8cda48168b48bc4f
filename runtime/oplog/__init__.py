"""
Operational logging for the agent logbook runtime.

Includes:
- ServerLogBuffer: bounded in-memory ring buffer of recent log entries
- server_log: the process-wide buffer instance
"""
