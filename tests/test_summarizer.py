"""Tests for the Summarizer."""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from openai import OpenAIError

from core.summarizer.prompts import SUMMARIZE_MAX_TOKENS, SUMMARIZE_SYSTEM_PROMPT
from core.summarizer.summarizer import Summarizer
from exceptions.exceptions import CredentialMissingError, UpstreamError


def make_completion(text):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=text))]
    )


class TestSummarize:
    def test_returns_message_text(self, summarizer):
        assert summarizer.summarize("## Turn 1\n- waited") == (
            "Aria met a stranger at the well and agreed to help."
        )

    def test_single_call_with_fixed_prompt_and_limits(self, summarizer, mock_openai):
        summarizer.summarize("## Turn 1\n- waited")

        mock_openai.chat.completions.create.assert_called_once_with(
            model="gpt-test",
            messages=[
                {"role": "system", "content": SUMMARIZE_SYSTEM_PROMPT},
                {"role": "user", "content": "## Turn 1\n- waited"},
            ],
            max_tokens=512,
        )
        assert SUMMARIZE_MAX_TOKENS == 512

    def test_system_prompt_describes_compression(self):
        assert "third person past tense" in SUMMARIZE_SYSTEM_PROMPT
        assert "spatial observations" in SUMMARIZE_SYSTEM_PROMPT

    def test_no_caching_between_calls(self, summarizer, mock_openai):
        summarizer.summarize("same")
        summarizer.summarize("same")

        assert mock_openai.chat.completions.create.call_count == 2

    def test_null_content_becomes_empty_string(self, summarizer, mock_openai):
        mock_openai.chat.completions.create.return_value = make_completion(None)

        assert summarizer.summarize("x") == ""

    def test_no_choices_is_upstream_error(self, summarizer, mock_openai):
        mock_openai.chat.completions.create.return_value = SimpleNamespace(choices=[])

        with pytest.raises(UpstreamError):
            summarizer.summarize("x")

    def test_provider_error_is_wrapped(self, summarizer, mock_openai):
        mock_openai.chat.completions.create.side_effect = OpenAIError("connection reset")

        with pytest.raises(UpstreamError) as exc_info:
            summarizer.summarize("x")

        assert exc_info.value.provider_message == "connection reset"
        assert exc_info.value.status_code == 502
        mock_openai.chat.completions.create.assert_called_once()


class TestCredential:
    def test_missing_credential_raises_before_call(self, unconfigured_settings):
        client = MagicMock()
        summarizer = Summarizer(unconfigured_settings, client=client)

        assert not summarizer.is_configured
        with pytest.raises(CredentialMissingError):
            summarizer.summarize("x")
        client.chat.completions.create.assert_not_called()

    def test_client_built_lazily_from_settings(self, test_settings, mock_openai):
        with patch(
            "core.api.openai_client.build_client", return_value=mock_openai
        ) as build_client:
            summarizer = Summarizer(test_settings)
            build_client.assert_not_called()

            summarizer.summarize("x")
            summarizer.summarize("y")

        build_client.assert_called_once_with(test_settings)

    def test_build_client_disables_retries(self, test_settings):
        from core.api.openai_client import build_client

        with patch("core.api.openai_client.OpenAI") as openai_cls:
            build_client(test_settings)

        openai_cls.assert_called_once_with(api_key="sk-test", base_url=None, max_retries=0)
