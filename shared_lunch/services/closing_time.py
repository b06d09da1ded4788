"""Cut-off evaluation for the daily settlement run."""

from __future__ import annotations

import re
from datetime import datetime

CLOSE_AT_PATTERN = re.compile(r"\s*([0-9]+):([0-9]+)\s*")


def parse_close_at(value: str | None) -> tuple[int, int] | None:
    """Parse "H:MM" into (hour, minute); None when absent, malformed or out of range.

    Leading zeros are accepted, so "009:00" reads as 09:00.
    """
    if not value:
        return None
    match = CLOSE_AT_PATTERN.fullmatch(value)
    if match is None:
        return None
    hour, minute = int(match.group(1)), int(match.group(2))
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        return None
    return hour, minute


def should_run(now: datetime, close_at: str | None, run_marker: str | None) -> bool:
    """Return True once the cut-off has passed and today is not yet settled."""
    parsed = parse_close_at(close_at)
    if parsed is None:
        return False

    hour, minute = parsed
    if now.hour * 60 + now.minute < hour * 60 + minute:
        return False
    return run_marker != now.date().isoformat()
