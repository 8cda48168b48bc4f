"""Pytest configuration and fixtures for the logbook tests."""

from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from configs.settings import Settings
from core.summarizer.summarizer import Summarizer
from runtime.api.server import create_app
from runtime.store.log_store import LogStore


def make_completion(text):
    """Build an object shaped like an OpenAI chat completion."""
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=text))]
    )


@pytest.fixture
def logs_dir(tmp_path: Path) -> Path:
    """Log directory that does not exist yet."""
    return tmp_path / "data" / "logs"


@pytest.fixture
def test_settings(logs_dir: Path) -> Settings:
    """Settings with a fake credential and temporary paths."""
    return Settings(
        environ={
            "OPENAI_API_KEY": "sk-test",
            "LOGBOOK_LOGS_DIR": str(logs_dir),
            "LOGBOOK_SUMMARIZE_MODEL": "gpt-test",
        }
    )


@pytest.fixture
def unconfigured_settings(logs_dir: Path) -> Settings:
    """Settings without any provider credential."""
    return Settings(environ={"LOGBOOK_LOGS_DIR": str(logs_dir)})


@pytest.fixture
def store(logs_dir: Path) -> LogStore:
    return LogStore(logs_dir=logs_dir)


@pytest.fixture
def mock_openai():
    """Mock OpenAI client returning a fixed summary."""
    client = MagicMock()
    client.chat.completions.create.return_value = make_completion(
        "Aria met a stranger at the well and agreed to help."
    )
    return client


@pytest.fixture
def summarizer(test_settings: Settings, mock_openai) -> Summarizer:
    return Summarizer(test_settings, client=mock_openai)


@pytest.fixture
def client(test_settings: Settings, store: LogStore, summarizer: Summarizer) -> TestClient:
    """Test client for an app wired to the temporary store and mock provider."""
    app = create_app(settings=test_settings, log_store=store, summarizer=summarizer)
    return TestClient(app)
