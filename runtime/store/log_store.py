"""LogStore: file-backed storage for per-agent chronological and goal logs.

Layout (by convention):

    <logs_dir>/chronological-<agent_id>.md
    <logs_dir>/goals-<agent_id>.md

Content is an opaque UTF-8 text blob. The store never parses it; callers
own any markdown structure inside.

The design is intentionally simple:
- read returns "" when nothing has been written yet.
- write replaces the whole file. A temp file in the same directory is
  renamed over the target, so readers see either the old or the new
  content, never a partial one.
- There is no per-key locking. Two concurrent writers on the same
  (agent_id, kind) race and the last rename wins, with no merge.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Union

from core.validation.identifiers import validate_agent_id
from exceptions.exceptions import LogStoreError

from ..models.log_models import LogKind, LogRecord


logger = logging.getLogger(__name__)

# Read once at import: os.umask can only be queried by setting it.
_UMASK = os.umask(0)
os.umask(_UMASK)

# Mode a plain open() would give a new file.
FILE_MODE = 0o666 & ~_UMASK


class LogStore:
    """Whole-value read/overwrite access to per-agent log files.

    Parameters
    ----------
    logs_dir:
        Directory holding the log files. It is created on the first write,
        not on construction.
    """

    def __init__(self, logs_dir: Union[str, Path] = "data/logs") -> None:
        self.logs_dir = Path(logs_dir)

    def path_for(self, agent_id: str, kind: LogKind) -> Path:
        """Return the file path for the given agent + log kind.

        The identifier is validated again here so the store cannot be
        driven into building a path from an unchecked value.
        """
        validate_agent_id(agent_id)
        return self.logs_dir / f"{LogKind(kind).value}-{agent_id}.md"

    def read(self, agent_id: str, kind: LogKind) -> str:
        """Return the stored content, or "" if the log was never written.

        Raises
        ------
        LogStoreError
            If the file exists but cannot be read.
        """
        path = self.path_for(agent_id, kind)
        try:
            with path.open("r", encoding="utf-8", newline="") as f:
                return f.read()
        except FileNotFoundError:
            return ""
        except (OSError, UnicodeDecodeError) as e:
            raise LogStoreError(path, str(e)) from e

    def write(self, agent_id: str, kind: LogKind, content: str) -> None:
        """Replace the entire stored content for the given agent + log kind.

        Raises
        ------
        LogStoreError
            If the directory or file cannot be written.
        """
        path = self.path_for(agent_id, kind)
        tmp_name = None
        try:
            self.logs_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.logs_dir, prefix=f".{path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(content)
            # mkstemp creates the file owner-only.
            os.chmod(tmp_name, FILE_MODE)
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise LogStoreError(path, str(e)) from e

        logger.debug("[LOGS] wrote %d chars to %s", len(content), path)

    def get_record(self, agent_id: str, kind: LogKind) -> LogRecord:
        """Return the stored content wrapped in a LogRecord."""
        return LogRecord(
            agent_id=agent_id,
            kind=kind,
            content=self.read(agent_id, kind),
        )
