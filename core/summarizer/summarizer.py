"""
Log summarization for chronological log compaction.

The Summarizer takes a raw block of chronological log text and asks the
configured text-generation provider to condense it into one narrative
paragraph. Deciding which entries to compact, and splicing the summary
back into the log, is left to the caller (see core/compaction/).

No retries and no caching: each call is a single fresh provider request.
"""

from __future__ import annotations

import logging
import time
from typing import Optional

from openai import OpenAI, OpenAIError

from configs.settings import Settings
from core.api import openai_client
from exceptions.exceptions import CredentialMissingError, UpstreamError

from .prompts import SUMMARIZE_MAX_TOKENS, SUMMARIZE_SYSTEM_PROMPT


logger = logging.getLogger(__name__)


class Summarizer:
    """Condense chronological log entries via the OpenAI API.

    Parameters
    ----------
    settings:
        Resolved configuration; supplies the credential, base URL and model.
    client:
        Optional pre-built OpenAI client. When omitted, one is created on
        first use, so a Summarizer can exist before a credential does. The
        credential check applies either way.
    """

    def __init__(self, settings: Settings, client: Optional[OpenAI] = None) -> None:
        self.settings = settings
        self._client = client

    @property
    def is_configured(self) -> bool:
        return self.settings.has_openai_api_key

    def ensure_configured(self) -> None:
        """Raise CredentialMissingError if no provider credential is available."""
        if not self.is_configured:
            raise CredentialMissingError("OPENAI_API_KEY")

    def _get_client(self) -> OpenAI:
        if self._client is None:
            self._client = openai_client.build_client(self.settings)
        return self._client

    def summarize(self, entries: str) -> str:
        """Return a single-paragraph summary of `entries`.

        Raises
        ------
        CredentialMissingError
            If no credential is configured. The provider is not contacted.
        UpstreamError
            If the provider call fails or returns no choices.
        """
        self.ensure_configured()
        client = self._get_client()
        model = self.settings.summarize_model

        start = time.monotonic()
        try:
            summary = openai_client.complete_text(
                client,
                system=SUMMARIZE_SYSTEM_PROMPT,
                user=entries,
                model=model,
                max_tokens=SUMMARIZE_MAX_TOKENS,
            )
        except OpenAIError as e:
            logger.error(
                "[SUMMARIZE] provider call failed: %s",
                e,
                extra={"tag": "summarize"},
            )
            raise UpstreamError(str(e)) from e

        if summary is None:
            raise UpstreamError("Empty response from OpenAI API.")

        duration_ms = int((time.monotonic() - start) * 1000)
        logger.info(
            "[SUMMARIZE] compressed %d chars into %d chars",
            len(entries),
            len(summary),
            extra={
                "tag": "summarize",
                "metadata": {"model": model, "durationMs": duration_ms},
            },
        )
        return summary
