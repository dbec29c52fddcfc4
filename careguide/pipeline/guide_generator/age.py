"""Human-readable age line for a child.

Children under two are described in days, weeks or months; older children
in half-year steps. A birthdate in the future is an expected due date and
is rendered as a countdown.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta
from typing import Any


def parse_birthdate(value: Any) -> date | None:
    """Return ``value`` as a date, or ``None`` when it cannot be read.

    Accepts ``date``/``datetime`` objects and ISO strings; only the
    ``YYYY-MM-DD`` prefix of a string is used, so timestamps stored with a
    time part still parse as a local calendar date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


def _count(amount: int, unit: str) -> str:
    return f"{amount} {unit}" if amount == 1 else f"{amount} {unit}s"


def _countdown(days_left: int) -> str:
    if days_left == 1:
        return "Due tomorrow"
    if days_left < 7:
        return f"{days_left} days until due"
    if days_left < 30:
        weeks, days = divmod(days_left, 7)
        if days == 0:
            return f"{_count(weeks, 'week')} until due"
        return f"{_count(weeks, 'week')}, {_count(days, 'day')} until due"
    months, days = divmod(days_left, 30)
    if days == 0:
        return f"{_count(months, 'month')} until due"
    if days < 7:
        return f"{_count(months, 'month')}, {_count(days, 'day')} until due"
    return f"{_count(months, 'month')}, {_count(days // 7, 'week')} until due"


def format_age(birthdate: Any, today: date | None = None) -> str | None:
    """Format the age of a child born on ``birthdate`` as of ``today``.

    Parameters
    ----------
    birthdate : Any
        Date, datetime or ISO date string.
    today : date | None, optional
        Reference day; defaults to the current local date.

    Returns
    -------
    str | None
        Age text, or ``None`` when the birthdate is missing or unreadable.

    Examples
    --------
    >>> format_age("2024-01-15", today=date(2024, 9, 20))
    '8 months'
    >>> format_age("2020-03-01", today=date(2024, 10, 1))
    '4.5 years'
    >>> format_age("2024-10-11", today=date(2024, 10, 1))
    '1 week, 3 days until due'
    """
    birth = parse_birthdate(birthdate)
    if birth is None:
        return None
    today = today or date.today()
    if birth > today:
        return _countdown((birth - today).days)

    years = today.year - birth.year
    months = today.month - birth.month
    days = today.day - birth.day
    if days < 0:
        months -= 1
        days += (today.replace(day=1) - timedelta(days=1)).day
    if months < 0:
        years -= 1
        months += 12

    total_months = years * 12 + months
    if years < 2:
        if total_months == 0:
            return _count(days, "day") if days < 7 else _count(days // 7, "week")
        if total_months < 12:
            return _count(total_months, "month")
        if total_months % 12 == 0:
            return _count(years, "year")
        return f"{_count(years, 'year')}, {_count(total_months % 12, 'month')}"

    # half-year precision, halves round up
    rounded = math.floor(total_months / 12 * 2 + 0.5) / 2
    if rounded.is_integer():
        return f"{int(rounded)} years"
    return f"{rounded} years"
