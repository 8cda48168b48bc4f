"""Tests for the in-memory operational log buffer."""

import logging

import pytest

from runtime.models.log_models import ServerLogEntry
from runtime.oplog.server_log import MAX_ENTRIES, ServerLogBuffer, install_server_log, server_log


def make_entry(i: int) -> ServerLogEntry:
    return ServerLogEntry(timestamp=float(i), level="info", tag="test", message=f"entry {i}")


@pytest.fixture
def buffer_logger():
    """A private logger wired to a fresh buffer."""
    buffer = ServerLogBuffer()
    logger = logging.getLogger("tests.server_log")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    logger.addHandler(buffer)
    yield buffer, logger
    logger.removeHandler(buffer)


class TestRingBuffer:
    def test_default_capacity(self):
        assert ServerLogBuffer().capacity == MAX_ENTRIES == 1000

    def test_oldest_entries_evicted_first(self):
        buffer = ServerLogBuffer(capacity=3)
        for i in range(5):
            buffer.append(make_entry(i))

        assert [e.message for e in buffer.entries()] == ["entry 2", "entry 3", "entry 4"]

    def test_entries_returns_snapshot(self):
        buffer = ServerLogBuffer()
        buffer.append(make_entry(1))

        snapshot = buffer.entries()
        buffer.append(make_entry(2))

        assert len(snapshot) == 1
        assert len(buffer.entries()) == 2

    def test_clear(self):
        buffer = ServerLogBuffer()
        buffer.append(make_entry(1))
        buffer.clear()

        assert buffer.entries() == []


class TestSubscribers:
    def test_subscriber_notified_on_append(self):
        buffer = ServerLogBuffer()
        received = []
        buffer.subscribe(received.append)

        entry = make_entry(1)
        buffer.append(entry)

        assert received == [entry]

    def test_unsubscribe_stops_notifications(self):
        buffer = ServerLogBuffer()
        received = []
        unsubscribe = buffer.subscribe(received.append)

        unsubscribe()
        unsubscribe()
        buffer.append(make_entry(1))

        assert received == []


class TestLoggingHandler:
    def test_records_become_entries(self, buffer_logger):
        buffer, logger = buffer_logger

        logger.info("stored %d chars", 12, extra={"tag": "logs", "metadata": {"agent": "aria"}})

        [entry] = buffer.entries()
        assert entry.level == "info"
        assert entry.tag == "logs"
        assert entry.message == "stored 12 chars"
        assert entry.metadata == {"agent": "aria"}

    def test_level_mapping(self, buffer_logger):
        buffer, logger = buffer_logger

        logger.debug("d")
        logger.warning("w")
        logger.error("e")
        logger.critical("c")

        assert [e.level for e in buffer.entries()] == ["info", "warn", "error", "error"]

    def test_tag_defaults_to_logger_leaf_name(self, buffer_logger):
        buffer, logger = buffer_logger

        logger.info("hello")

        assert buffer.entries()[0].tag == "server_log"
        assert buffer.entries()[0].metadata is None


class TestInstall:
    def test_install_is_idempotent(self):
        install_server_log("INFO")
        install_server_log("INFO")

        handlers = logging.getLogger("runtime").handlers
        assert handlers.count(server_log) == 1

    def test_api_logs_reach_server_log_endpoint(self, client):
        server_log.clear()

        client.post("/api/logs/aria", json={"content": "Day 1"})
        response = client.get("/api/server-logs")

        assert response.status_code == 200
        messages = [e["message"] for e in response.json()["entries"]]
        assert any("aria" in m for m in messages)
        assert all(e["level"] in ("info", "warn", "error") for e in response.json()["entries"])
