from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional, Union

from dotenv import load_dotenv

from exceptions.exceptions import CredentialMissingError


DEFAULT_ENV_FILE = ".env"
DEFAULT_SUMMARIZE_MODEL = "gpt-4.1-mini"


def load_env_file(path: Union[str, Path] = DEFAULT_ENV_FILE) -> bool:
    """
    Populate os.environ from a local key=value file.

    Blank lines and '#' comments are ignored. Variables that are already
    present in the environment are never overridden. A missing file is not
    an error: it simply means no fallback values are available, and False
    is returned.

    Call this once at process start, before any Settings is built.
    """
    env_path = Path(path)
    if not env_path.is_file():
        return False
    return load_dotenv(env_path, override=False)


load_env_file(os.getenv("LOGBOOK_ENV_FILE", DEFAULT_ENV_FILE))


class Settings:
    """
    Central configuration for the agent logbook.

    Values are resolved once from environment variables (with sensible
    defaults) and then exposed via typed properties. Components receive the
    Settings instance explicitly instead of reading the environment at call
    time.

    Parameters
    ----------
    environ:
        Mapping to read from. Defaults to os.environ; tests pass a plain
        dict so they never depend on the developer's shell.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        env = os.environ if environ is None else environ

        # OpenAI / summarization provider
        self._openai_api_key = env.get("OPENAI_API_KEY") or None
        self._openai_base_url = env.get("OPENAI_BASE_URL") or None
        self._summarize_model = env.get(
            "LOGBOOK_SUMMARIZE_MODEL", DEFAULT_SUMMARIZE_MODEL
        )

        # Storage
        self._logs_dir = Path(env.get("LOGBOOK_LOGS_DIR", "data/logs"))

        # Logging
        self._log_level = env.get("LOGBOOK_LOG_LEVEL", "INFO").upper()

        # Compaction defaults used by the CLI
        self._keep_recent_turns = int(env.get("LOGBOOK_KEEP_RECENT_TURNS", "5"))
        self._prompt_char_budget = int(env.get("LOGBOOK_PROMPT_CHAR_BUDGET", "4000"))

    # ------------------------------------------------------------------
    # OpenAI / summarization settings
    # ------------------------------------------------------------------

    @property
    def openai_api_key(self) -> str:
        if not self._openai_api_key:
            raise CredentialMissingError("OPENAI_API_KEY")
        return self._openai_api_key

    @property
    def has_openai_api_key(self) -> bool:
        return bool(self._openai_api_key)

    @property
    def openai_base_url(self) -> Optional[str]:
        return self._openai_base_url

    @property
    def summarize_model(self) -> str:
        return self._summarize_model

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    @property
    def logs_dir(self) -> Path:
        return self._logs_dir

    # ------------------------------------------------------------------
    # Logging / compaction
    # ------------------------------------------------------------------

    @property
    def log_level(self) -> str:
        return self._log_level

    @property
    def keep_recent_turns(self) -> int:
        return self._keep_recent_turns

    @property
    def prompt_char_budget(self) -> int:
        return self._prompt_char_budget


settings = Settings()
