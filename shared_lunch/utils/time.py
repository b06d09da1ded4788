"""Local clock helpers used for 'today' queries."""

from __future__ import annotations

from datetime import date, datetime


def local_now() -> datetime:
    """Return naive local wall-clock time.

    Cut-off times are entered by the administrator in local time, so order
    days and cut-off checks both use the local calendar.
    """
    return datetime.now()


def local_today() -> date:
    return local_now().date()
