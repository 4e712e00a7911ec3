from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Union

DateLike = Union[date, datetime, str, None]


def parse_datetime(value: DateLike) -> Optional[datetime]:
    """Coerce a date-like value into a datetime, or None when it cannot be parsed.

    Accepts datetime/date objects and ISO 8601 strings ("2025-11-16",
    "2025-11-16T08:05:00", trailing "Z" allowed).
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def to_local_naive(value: datetime) -> datetime:
    """Drop tzinfo after converting aware values to local time; naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)
