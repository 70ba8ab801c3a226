"""Clock helpers for order validation and timestamps."""

from __future__ import annotations

from datetime import datetime, timezone


def current_local_datetime() -> datetime:
    """Return naive local time.

    Delivery dates and time windows are entered as local wall-clock values, so
    lead-time checks compare against naive local time with no conversion.
    """
    return datetime.now()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
