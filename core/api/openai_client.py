"""
core.api.openai_client

Thin wrapper around the OpenAI Chat Completions API for the logbook.

Used by:
  - core/summarizer/summarizer.py
"""

from __future__ import annotations

from typing import Optional

from openai import OpenAI

from configs.settings import Settings


# -------------------------------------------------------------------
# Client construction
# -------------------------------------------------------------------


def build_client(settings: Settings) -> OpenAI:
    """
    Create an OpenAI client from the given settings.

    Retries are disabled: every summarization is a single independent
    request, and the caller decides whether to try again.

    Raises
    ------
    CredentialMissingError
        If OPENAI_API_KEY is not configured.
    """
    return OpenAI(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        max_retries=0,
    )


# -------------------------------------------------------------------
# Public function
# -------------------------------------------------------------------


def complete_text(
    client: OpenAI,
    *,
    system: str,
    user: str,
    model: str,
    max_tokens: int,
) -> Optional[str]:
    """
    Send one system + user exchange and return the reply text.

    Returns None when the API answered without any choices, so callers can
    decide how to treat an empty response.

    Raises
    ------
    OpenAIError
        If the API call fails.
    """
    completion = client.chat.completions.create(
        model=model,
        messages=[
            {"role": "system", "content": system},
            {"role": "user", "content": user},
        ],
        max_tokens=max_tokens,
    )

    if not completion.choices:
        return None

    return completion.choices[0].message.content or ""
