"""Wall-clock access for the engine.

Engine functions accept an explicit ``today`` so tests and callers can pin the
date; these helpers supply the default.
"""

from datetime import date


def today() -> date:
    """Current local date (no time component)."""
    return date.today()


def format_iso(value: date) -> str:
    """Format a date as ``YYYY-MM-DD``."""
    return value.isoformat()


def today_iso() -> str:
    """Current local date as ``YYYY-MM-DD``."""
    return format_iso(today())


__all__ = ["today", "format_iso", "today_iso"]
