#!/usr/bin/env python3
"""
Agent Logbook CLI

Operator commands around the per-agent log files:

1) serve
   - Run the HTTP API (GET/POST /api/logs, /api/goals, POST /api/summarize)
     with uvicorn.

2) show
   - Print an agent's chronological (or goal) log.

3) write
   - Overwrite an agent's log with the contents of a local file.

4) compact
   - Summarize the aged turns of an agent's chronological log once,
     keeping the most recent N turns as-is.

The server can also be started directly, e.g.:

    uvicorn runtime.api.server:app --reload
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

# Ensure project root is on sys.path when running as a script
ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from configs.settings import settings
from exceptions.exceptions import LogbookError
from runtime.models.log_models import LogKind
from runtime.store.log_store import LogStore


def _kind(goals: bool) -> LogKind:
    return LogKind.GOALS if goals else LogKind.CHRONOLOGICAL


# ---------------------------------------------------------------------------
# serve
# ---------------------------------------------------------------------------


def cmd_serve(host: str, port: int, logs_dir: str, reload: bool) -> None:
    """Run the logbook API with uvicorn."""
    import uvicorn

    print(f"[Logbook] Serving on http://{host}:{port} (logs_dir={logs_dir})")

    if reload:
        # The reloader re-imports the app in a child process, which picks
        # the logs directory up from the environment.
        os.environ["LOGBOOK_LOGS_DIR"] = logs_dir
        uvicorn.run("runtime.api.server:app", host=host, port=port, reload=True)
        return

    from runtime.api.server import create_app

    app = create_app(settings=settings, log_store=LogStore(logs_dir=logs_dir))
    uvicorn.run(app, host=host, port=port)


# ---------------------------------------------------------------------------
# show / write
# ---------------------------------------------------------------------------


def _write_stdout_exact(text: str) -> None:
    """Write text to stdout without newline translation."""
    sys.stdout.flush()
    sys.stdout.buffer.write(text.encode("utf-8"))
    sys.stdout.buffer.flush()


def cmd_show(
    agent_id: str,
    logs_dir: str,
    goals: bool,
    prompt_budget: Optional[int] = None,
) -> None:
    """Print the stored log; an agent with no log prints nothing.

    With prompt_budget, the chronological log is rendered the way a
    reasoning engine would receive it: oldest summaries, then oldest turns
    are dropped until it fits the character budget.
    """
    store = LogStore(logs_dir=logs_dir)
    record = store.get_record(agent_id, _kind(goals))

    if prompt_budget is None:
        _write_stdout_exact(record.content)
        return

    from core.compaction.chronological_log import ChronologicalLog

    rendered = ChronologicalLog.parse(record.content).build_prompt_content(prompt_budget)
    _write_stdout_exact(rendered + "\n" if rendered else "")


def cmd_write(agent_id: str, src_path: str, logs_dir: str, goals: bool) -> None:
    """Replace the stored log with the contents of src_path."""
    src = Path(src_path)
    if not src.is_file():
        raise FileNotFoundError(f"Source file not found: {src_path}")

    # Decode the raw bytes so line endings are stored exactly as in the file.
    content = src.read_bytes().decode("utf-8")
    store = LogStore(logs_dir=logs_dir)
    kind = _kind(goals)
    store.write(agent_id, kind, content)
    print(f"[Logbook] ✓ {kind.value} log for {agent_id} replaced ({len(content)} chars)")


# ---------------------------------------------------------------------------
# compact
# ---------------------------------------------------------------------------


def cmd_compact(agent_id: str, logs_dir: str, keep_recent: int) -> None:
    """Summarize everything but the newest `keep_recent` turns."""
    # Lazy import so show/write do not pull in the OpenAI SDK.
    from core.compaction.compactor import compact_log
    from core.summarizer.summarizer import Summarizer

    store = LogStore(logs_dir=logs_dir)
    summarizer = Summarizer(settings)

    print(f"[Logbook] Compacting chronological log for {agent_id}...")
    summary = compact_log(agent_id, store, summarizer, keep_recent=keep_recent)
    if summary is None:
        print(f"[Logbook] Nothing to compact (keeping last {keep_recent} turns)")
    else:
        print(f"[Logbook] ✓ Turns {summary.turn_start}-{summary.turn_end} summarized")


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Agent Logbook CLI")
    parser.add_argument(
        "--logs-dir",
        default=str(settings.logs_dir),
        help="Directory holding log files (default: LOGBOOK_LOGS_DIR or 'data/logs')",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # serve
    p_serve = subparsers.add_parser("serve", help="Run the HTTP API with uvicorn")
    p_serve.add_argument("--host", default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=8080)
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")

    # show
    p_show = subparsers.add_parser("show", help="Print an agent's log")
    p_show.add_argument("agent_id", help="Agent identifier ([A-Za-z0-9_-]+)")
    p_show.add_argument("--goals", action="store_true", help="Use the goal log")
    p_show.add_argument(
        "--prompt",
        action="store_true",
        help="Render the chronological log trimmed to the prompt character budget",
    )
    p_show.add_argument(
        "--budget",
        type=int,
        default=settings.prompt_char_budget,
        help="Character budget for --prompt (default: LOGBOOK_PROMPT_CHAR_BUDGET or 4000)",
    )

    # write
    p_write = subparsers.add_parser(
        "write", help="Overwrite an agent's log from a local file"
    )
    p_write.add_argument("agent_id", help="Agent identifier ([A-Za-z0-9_-]+)")
    p_write.add_argument("path", help="UTF-8 text file with the new log content")
    p_write.add_argument("--goals", action="store_true", help="Use the goal log")

    # compact
    p_compact = subparsers.add_parser(
        "compact", help="Summarize the aged turns of a chronological log"
    )
    p_compact.add_argument("agent_id", help="Agent identifier ([A-Za-z0-9_-]+)")
    p_compact.add_argument(
        "--keep",
        type=int,
        default=settings.keep_recent_turns,
        help="Number of recent turns to keep verbatim (default: LOGBOOK_KEEP_RECENT_TURNS or 5)",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    logs_dir: str = args.logs_dir
    command: str = args.command

    try:
        if command == "serve":
            cmd_serve(host=args.host, port=args.port, logs_dir=logs_dir, reload=args.reload)
        elif command == "show":
            if args.prompt and args.goals:
                parser.error("--prompt only applies to the chronological log")
            cmd_show(
                agent_id=args.agent_id,
                logs_dir=logs_dir,
                goals=args.goals,
                prompt_budget=args.budget if args.prompt else None,
            )
        elif command == "write":
            cmd_write(
                agent_id=args.agent_id,
                src_path=args.path,
                logs_dir=logs_dir,
                goals=args.goals,
            )
        elif command == "compact":
            cmd_compact(agent_id=args.agent_id, logs_dir=logs_dir, keep_recent=args.keep)
        else:
            parser.error(f"Unknown command: {command}")
    except (LogbookError, FileNotFoundError) as e:
        print(f"[Logbook] ✗ {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
