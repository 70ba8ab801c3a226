"""Week identifier and weekday label helpers.

Menu offerings are tagged with a weekday label and a week identifier of the
form ``YYYY-WW``. The week number is counted from January 1st with weeks
running Sunday to Saturday, so it differs from ISO-8601 weeks.
Stored offerings carry identifiers produced by this exact arithmetic.
"""

from __future__ import annotations

import math
from datetime import date, timedelta

DAYS_OF_WEEK: tuple[str, ...] = (
    "Thứ Hai",
    "Thứ Ba",
    "Thứ Tư",
    "Thứ Năm",
    "Thứ Sáu",
    "Thứ Bảy",
    "Chủ Nhật",
)


def _sunday_first_weekday(value: date) -> int:
    """Return weekday index with Sunday as 0 and Saturday as 6."""
    return (value.weekday() + 1) % 7


def week_number(value: date) -> int:
    """Return the Jan-1-anchored week number for a calendar date."""
    start_of_year: date = date(value.year, 1, 1)
    days: int = (value - start_of_year).days
    return math.ceil((days + _sunday_first_weekday(start_of_year) + 1) / 7)


def week_identifier(value: date) -> str:
    """Return the ``YYYY-WW`` week token used to scope menus and deliveries."""
    return f"{value.year}-{week_number(value):02d}"


def current_week_identifier(today: date | None = None) -> str:
    return week_identifier(today or date.today())


def weekday_label(value: date) -> str:
    """Map a date to its Monday-first weekday label."""
    return DAYS_OF_WEEK[value.weekday()]


def ensure_day_label(label: str) -> str:
    """Return label unchanged or raise ValueError for unknown labels."""
    if label not in DAYS_OF_WEEK:
        raise ValueError(f"Unknown day label: {label!r}")
    return label


def monday_of(value: date) -> date:
    """Return Monday of the Monday-first browsing week containing value."""
    return value - timedelta(days=value.weekday())


def week_dates(start: date) -> list[date]:
    """Return seven consecutive dates beginning at start."""
    return [start + timedelta(days=offset) for offset in range(7)]


def date_for_day(label: str, week_offset: int = 0, today: date | None = None) -> date:
    """Return the date of a day label in the current browsing week shifted by week_offset."""
    index: int = DAYS_OF_WEEK.index(ensure_day_label(label))
    return monday_of(today or date.today()) + timedelta(days=index + week_offset * 7)
