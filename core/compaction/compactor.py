"""
One-shot compaction of an agent's chronological log.

Reads the stored log, summarizes the aged prefix of turns, and writes the
summary plus the retained recent turns back as a single overwrite. The
logbook never schedules this on its own; the CLI `compact` command and
external callers decide when to run it.
"""

from __future__ import annotations

import logging
from typing import Optional

from core.summarizer.summarizer import Summarizer
from core.validation.identifiers import validate_agent_id
from runtime.models.log_models import LogKind
from runtime.store.log_store import LogStore

from .chronological_log import ChronologicalLog, Summary


logger = logging.getLogger(__name__)


def compact_log(
    agent_id: str,
    store: LogStore,
    summarizer: Summarizer,
    keep_recent: int = 5,
) -> Optional[Summary]:
    """
    Compact the chronological log of `agent_id`.

    Returns the new Summary, or None when fewer turns than needed have aged
    out. Provider or storage failures propagate unchanged and leave the
    stored log untouched.

    A write that lands between the read and the final overwrite here is
    lost; there is no per-agent locking.
    """
    validate_agent_id(agent_id)

    log = ChronologicalLog.parse(store.read(agent_id, LogKind.CHRONOLOGICAL))
    aged = log.entries_to_summarize(keep_recent)
    if not aged:
        logger.info(
            "[COMPACT] %s: %d turns, nothing to compact (keep_recent=%d)",
            agent_id,
            len(log.entries),
            keep_recent,
            extra={"tag": "compact"},
        )
        return None

    entries_text = "\n\n".join(entry.to_markdown() for entry in aged)
    summary = log.apply_summary(summarizer.summarize(entries_text), aged)
    store.write(agent_id, LogKind.CHRONOLOGICAL, log.to_markdown())

    logger.info(
        "[COMPACT] %s: turns %d-%d summarized, %d turns kept",
        agent_id,
        summary.turn_start,
        summary.turn_end,
        len(log.entries),
        extra={"tag": "compact"},
    )
    return summary
