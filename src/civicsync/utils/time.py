"""Timestamp parsing helpers.

All bucketing works on UTC calendar dates. Naive timestamps are read as UTC.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional


WEEKDAY_LABELS: tuple[str, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def parse_created_at(value: object) -> Optional[datetime]:
    """Parse a report createdAt value into an aware UTC datetime."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        normalized = value.strip().replace("Z", "+00:00")
        try:
            parsed = datetime.fromisoformat(normalized)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def month_key(moment: datetime) -> str:
    """Return the YYYY-MM bucket for a UTC datetime."""
    return f"{moment.year:04d}-{moment.month:02d}"


def weekday_label(day: date) -> str:
    return WEEKDAY_LABELS[day.weekday()]


def utc_today() -> date:
    return datetime.now(timezone.utc).date()
