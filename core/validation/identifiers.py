"""
Agent identifier validation.

Agent identifiers are used verbatim as part of on-disk filenames, so this
check is the only thing standing between a crafted identifier and an
arbitrary file path. Every caller that touches the log store goes through
validate_agent_id first.
"""

import re

from exceptions.exceptions import InvalidAgentIdError


# ASCII only; re.ASCII keeps \w-style unicode matching out of the picture
# and fullmatch refuses a trailing newline that "$" alone would allow.
AGENT_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]+", re.ASCII)


def is_valid_agent_id(raw) -> bool:
    """Return True if `raw` is a non-empty string of letters, digits, _ or -."""
    return isinstance(raw, str) and AGENT_ID_PATTERN.fullmatch(raw) is not None


def validate_agent_id(raw: str) -> str:
    """Return `raw` unchanged if it is a valid agent identifier.

    Raises
    ------
    InvalidAgentIdError
        If the identifier is empty or contains anything other than ASCII
        letters, digits, '_' or '-'.
    """
    if not is_valid_agent_id(raw):
        raise InvalidAgentIdError(raw)
    return raw
