"""Tests for one-shot chronological log compaction."""

from unittest.mock import MagicMock

import pytest

from core.compaction.chronological_log import ChronologicalLog
from core.compaction.compactor import compact_log
from exceptions.exceptions import InvalidAgentIdError, UpstreamError
from runtime.models.log_models import LogKind


def write_turns(store, agent_id: str, turns: int) -> str:
    log = ChronologicalLog()
    for n in range(1, turns + 1):
        log.start_turn(n, [f"I am at ({n},0)"])
    content = log.to_markdown()
    store.write(agent_id, LogKind.CHRONOLOGICAL, content)
    return content


class TestCompactLog:
    def test_summarizes_aged_turns_and_keeps_recent(self, store, summarizer, mock_openai):
        write_turns(store, "aria", 12)

        summary = compact_log("aria", store, summarizer, keep_recent=5)

        assert (summary.turn_start, summary.turn_end) == (1, 7)
        log = ChronologicalLog.parse(store.read("aria", LogKind.CHRONOLOGICAL))
        assert [s.text for s in log.summaries] == [
            "Aria met a stranger at the well and agreed to help."
        ]
        assert [e.turn_number for e in log.entries] == [8, 9, 10, 11, 12]

        sent = mock_openai.chat.completions.create.call_args.kwargs["messages"][-1]["content"]
        assert sent.startswith("## Turn 1\n")
        assert "## Turn 7" in sent
        assert "## Turn 8" not in sent

    def test_nothing_to_compact_leaves_log_alone(self, store, summarizer, mock_openai):
        original = write_turns(store, "aria", 6)

        assert compact_log("aria", store, summarizer, keep_recent=5) is None
        assert store.read("aria", LogKind.CHRONOLOGICAL) == original
        mock_openai.chat.completions.create.assert_not_called()

    def test_existing_summaries_are_kept(self, store, summarizer):
        store.write(
            "aria",
            LogKind.CHRONOLOGICAL,
            "## Summary (Turns 1-3)\nEarlier days.\n\n"
            + "\n\n".join(f"## Turn {n}\n- waited" for n in range(4, 10)),
        )

        compact_log("aria", store, summarizer, keep_recent=3)

        log = ChronologicalLog.parse(store.read("aria", LogKind.CHRONOLOGICAL))
        assert [(s.turn_start, s.turn_end) for s in log.summaries] == [(1, 3), (4, 6)]
        assert [e.turn_number for e in log.entries] == [7, 8, 9]

    def test_provider_failure_leaves_log_untouched(self, store, summarizer, mock_openai):
        from openai import OpenAIError

        original = write_turns(store, "aria", 12)
        mock_openai.chat.completions.create.side_effect = OpenAIError("timeout")

        with pytest.raises(UpstreamError):
            compact_log("aria", store, summarizer, keep_recent=5)

        assert store.read("aria", LogKind.CHRONOLOGICAL) == original

    def test_invalid_agent_id(self, summarizer):
        store = MagicMock()

        with pytest.raises(InvalidAgentIdError):
            compact_log("../etc", store, summarizer)
        store.read.assert_not_called()
