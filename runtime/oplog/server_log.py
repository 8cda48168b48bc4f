"""In-memory operational log for the logbook runtime.

ServerLogBuffer is a logging.Handler that keeps the most recent records as
ServerLogEntry objects in a bounded ring buffer (oldest evicted first) and
notifies subscribers on every append. Nothing is persisted; the buffer is
empty again after a restart.

Modules keep logging through logging.getLogger(__name__). Two optional
`extra` keys shape the entry:

    logger.info("...", extra={"tag": "summarize", "metadata": {...}})
"""

import logging
import threading
from collections import deque
from typing import Callable, Iterable, List

from ..models.log_models import ServerLogEntry


MAX_ENTRIES = 1000

# Loggers whose records feed the process-wide buffer.
CAPTURED_LOGGERS = ("runtime", "core", "cli")

Subscriber = Callable[[ServerLogEntry], None]


def _level_name(levelno: int) -> str:
    if levelno >= logging.ERROR:
        return "error"
    if levelno >= logging.WARNING:
        return "warn"
    return "info"


class ServerLogBuffer(logging.Handler):
    """Bounded, thread-safe buffer of operational log entries."""

    def __init__(self, capacity: int = MAX_ENTRIES, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self._entries: deque = deque(maxlen=capacity)
        self._subscribers: List[Subscriber] = []
        self._buffer_lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._entries.maxlen

    def append(self, entry: ServerLogEntry) -> None:
        """Add an entry, evicting the oldest one when full, and notify."""
        with self._buffer_lock:
            self._entries.append(entry)
            subscribers = list(self._subscribers)
        for callback in subscribers:
            callback(entry)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry = ServerLogEntry(
                timestamp=record.created,
                level=_level_name(record.levelno),
                tag=getattr(record, "tag", None) or record.name.rsplit(".", 1)[-1],
                message=record.getMessage(),
                metadata=getattr(record, "metadata", None),
            )
            self.append(entry)
        except Exception:
            self.handleError(record)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register `callback` for new entries; returns an unsubscribe function."""
        with self._buffer_lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._buffer_lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def entries(self) -> List[ServerLogEntry]:
        """Return a snapshot of the buffer, oldest first."""
        with self._buffer_lock:
            return list(self._entries)

    def clear(self) -> None:
        with self._buffer_lock:
            self._entries.clear()


# Process-wide buffer shared by the API and the CLI.
server_log = ServerLogBuffer()


def install_server_log(
    level="INFO",
    buffer: ServerLogBuffer = server_log,
    logger_names: Iterable[str] = CAPTURED_LOGGERS,
) -> ServerLogBuffer:
    """Attach `buffer` to the project loggers. Safe to call more than once."""
    for name in logger_names:
        target = logging.getLogger(name)
        target.setLevel(level)
        if buffer not in target.handlers:
            target.addHandler(buffer)
    return buffer
