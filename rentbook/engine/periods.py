"""Billing period labels.

A period is identified by a label such as ``"Oct 2025"``. Which month a bill
belongs to depends on the billing policy: bills can cover the month they are
issued in, or (billing in arrears) the month before.
"""

import calendar
from datetime import date
from enum import Enum

from rentbook.engine import clock
from rentbook.errors import DataValidationError

# Fixed English abbreviations so labels never depend on the process locale
MONTH_ABBREVIATIONS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


class PeriodPolicy(str, Enum):
    """Which month a bill issued on a given date belongs to."""

    SAME_MONTH = "same_month"
    """Label is the reference date's own month"""

    PRIOR_MONTH = "prior_month"
    """Label is the month before the reference date (billing in arrears)"""


def format_period_label(year: int, month: int) -> str:
    """Build a label like ``"Oct 2025"`` from a year and a 1-based month."""
    if not 1 <= month <= 12:
        raise DataValidationError(f"Month must be between 1 and 12, got {month}")
    return f"{MONTH_ABBREVIATIONS[month - 1]} {year:04d}"


def shift_month(year: int, month: int, months: int) -> tuple[int, int]:
    """Move (year, month) by ``months`` calendar months, rolling the year as needed."""
    index = year * 12 + (month - 1) + months
    return index // 12, index % 12 + 1


def compute_period_label(
    reference: date | None = None,
    policy: PeriodPolicy = PeriodPolicy.PRIOR_MONTH,
) -> str:
    """Label of the period a bill issued on ``reference`` belongs to.

    Args:
        reference: Reference date (default: today)
        policy: SAME_MONTH or PRIOR_MONTH

    Returns:
        Label such as ``"Dec 2025"``. With PRIOR_MONTH a January reference
        date yields December of the previous year.
    """
    if reference is None:
        reference = clock.today()
    policy = PeriodPolicy(policy)

    year, month = reference.year, reference.month
    if policy is PeriodPolicy.PRIOR_MONTH:
        year, month = shift_month(year, month, -1)

    return format_period_label(year, month)


def parse_period_label(label: str) -> tuple[int, int]:
    """Split a label like ``"Oct 2025"`` into ``(2025, 10)``.

    Raises:
        DataValidationError: If the label is not ``"Mon YYYY"``
    """
    parts = label.split() if isinstance(label, str) else []
    if len(parts) != 2 or parts[0] not in MONTH_ABBREVIATIONS or not parts[1].isdigit():
        raise DataValidationError(f"Invalid period label: {label!r}")
    return int(parts[1]), MONTH_ABBREVIATIONS.index(parts[0]) + 1


def shift_period(label: str, months: int) -> str:
    """Label of the period ``months`` away from ``label`` (negative goes back)."""
    year, month = parse_period_label(label)
    return format_period_label(*shift_month(year, month, months))


def period_bounds(label: str) -> tuple[date, date]:
    """First and last calendar day covered by a period label."""
    year, month = parse_period_label(label)
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


__all__ = [
    "MONTH_ABBREVIATIONS",
    "PeriodPolicy",
    "format_period_label",
    "shift_month",
    "compute_period_label",
    "parse_period_label",
    "shift_period",
    "period_bounds",
]
