"""
Section model for chronological logs, used on the caller side of compaction.

The log store treats log content as opaque text. Callers that compact a
log (the CLI, or a reasoning engine) use this module to read the markdown
layout they wrote in the first place:

    ## Summary (Turns 1-5)
    Aria walked to the well and ...

    ## Turn 6
    - I am at (3,4)
    - I can see: Bram at (5,4)

Sections with any other heading are dropped on parse.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional


SECTION_SPLIT = re.compile(r"^(?=## )", re.MULTILINE)
SUMMARY_HEADING = re.compile(r"^## Summary \(Turns (\d+)-(\d+)\)\n?(.*)$", re.DOTALL)
TURN_HEADING = re.compile(r"^## Turn (\d+)\n?(.*)$", re.DOTALL)


@dataclass
class TurnEntry:
    """One turn of observations and actions, stored as bullet lines."""

    turn_number: int
    lines: List[str] = field(default_factory=list)

    def to_markdown(self) -> str:
        bullets = "\n".join(f"- {line}" for line in self.lines)
        return f"## Turn {self.turn_number}\n{bullets}"


@dataclass
class Summary:
    """A condensed narrative covering turns turn_start..turn_end."""

    turn_start: int
    turn_end: int
    text: str

    def to_markdown(self) -> str:
        return f"## Summary (Turns {self.turn_start}-{self.turn_end})\n{self.text}"


class ChronologicalLog:
    """Summaries followed by individual turn entries, oldest first."""

    def __init__(
        self,
        summaries: Optional[List[Summary]] = None,
        entries: Optional[List[TurnEntry]] = None,
    ) -> None:
        self.summaries: List[Summary] = list(summaries or [])
        self.entries: List[TurnEntry] = list(entries or [])
        self._current: Optional[TurnEntry] = None

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    @classmethod
    def parse(cls, markdown: str) -> "ChronologicalLog":
        log = cls()
        if not markdown.strip():
            return log

        for section in SECTION_SPLIT.split(markdown):
            text = section.strip()
            if not text:
                continue

            match = SUMMARY_HEADING.match(text)
            if match:
                log.summaries.append(
                    Summary(
                        turn_start=int(match.group(1)),
                        turn_end=int(match.group(2)),
                        text=match.group(3).strip(),
                    )
                )
                continue

            match = TURN_HEADING.match(text)
            if match:
                lines = [
                    re.sub(r"^- ", "", line).strip()
                    for line in match.group(2).split("\n")
                ]
                log.entries.append(
                    TurnEntry(
                        turn_number=int(match.group(1)),
                        lines=[line for line in lines if line],
                    )
                )

        return log

    def _section_texts(self) -> List[str]:
        return [s.to_markdown() for s in self.summaries] + [
            e.to_markdown() for e in self.entries
        ]

    def to_markdown(self) -> str:
        return "\n\n".join(self._section_texts()) + "\n"

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def start_turn(self, turn_number: int, lines: Optional[List[str]] = None) -> TurnEntry:
        self._current = TurnEntry(turn_number=turn_number, lines=list(lines or []))
        self.entries.append(self._current)
        return self._current

    def record_action(self, description: str) -> None:
        # Actions outside a started turn are dropped.
        if self._current is not None:
            self._current.lines.append(description)

    def last_turn_number(self) -> int:
        last = 0
        for s in self.summaries:
            last = max(last, s.turn_end)
        for e in self.entries:
            last = max(last, e.turn_number)
        return last

    # ------------------------------------------------------------------
    # Compaction
    # ------------------------------------------------------------------

    def entries_to_summarize(self, keep_recent: int) -> List[TurnEntry]:
        """Return the aged prefix of turns eligible for compaction.

        Everything except the newest `keep_recent` turns qualifies, but only
        once at least `keep_recent` turns would be compacted; otherwise the
        result is empty.
        """
        if len(self.entries) <= keep_recent:
            return []
        aged = self.entries[: len(self.entries) - keep_recent]
        if len(aged) < keep_recent:
            return []
        return aged

    def apply_summary(self, text: str, compacted: List[TurnEntry]) -> Summary:
        """Replace the compacted turns with one summary section."""
        if not compacted:
            raise ValueError("apply_summary needs at least one compacted turn")
        summary = Summary(
            turn_start=compacted[0].turn_number,
            turn_end=compacted[-1].turn_number,
            text=text.strip(),
        )
        self.summaries.append(summary)
        self.entries = self.entries[len(compacted):]
        return summary

    def build_prompt_content(self, char_budget: int) -> str:
        """Render the log within `char_budget` characters where possible.

        Oldest summaries are dropped first, then oldest turns; the newest
        turn is always kept.
        """
        summary_texts = [s.to_markdown() for s in self.summaries]
        entry_texts = [e.to_markdown() for e in self.entries]
        if not summary_texts and not entry_texts:
            return ""

        summary_drop = 0
        result = "\n\n".join(summary_texts + entry_texts)
        while len(result) > char_budget and summary_drop < len(summary_texts):
            summary_drop += 1
            result = "\n\n".join(summary_texts[summary_drop:] + entry_texts)

        entry_drop = 0
        while len(result) > char_budget and entry_drop < len(entry_texts) - 1:
            entry_drop += 1
            result = "\n\n".join(
                summary_texts[summary_drop:] + entry_texts[entry_drop:]
            )

        return result
