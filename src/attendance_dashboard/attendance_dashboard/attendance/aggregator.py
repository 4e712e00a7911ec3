"""Day-of-week rollups over attendance records.

Everything here is a pure function of its arguments, recomputed on every call.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import DateLike, parse_datetime, to_local_naive
from ..core.constants import DEFAULT_EARLY_ARRIVAL_LIMIT, UNKNOWN_DAY, WEEKDAYS
from ..core.enums import AttendanceStatus
from ..sessions.model import Session
from .model import AttendanceRecord


@dataclass
class DayStats:
    """Counters for one weekday bucket. ``expected`` is None when unknown."""

    present: int = 0
    absent: int = 0
    late: int = 0
    expected: Optional[int] = None


@dataclass(frozen=True)
class ChartPoint:
    day: str
    present: int
    absent: int
    late: int
    expected: Optional[int]

    def to_dict(self) -> dict:
        return asdict(self)


def day_name(value: DateLike) -> Optional[str]:
    """Weekday abbreviation (Sun..Sat) of ``value`` on the local calendar, or None."""
    parsed = parse_datetime(value)
    if parsed is None:
        return None
    parsed = to_local_naive(parsed)
    # datetime.weekday() counts from Monday.
    return WEEKDAYS[(parsed.weekday() + 1) % 7]


def group_by_day(
    records: Iterable[AttendanceRecord],
    *,
    default_expected: Optional[int] = None,
) -> dict[str, DayStats]:
    """Bucket records per weekday, counting present/absent/late.

    Records whose date does not parse go to the "Unknown" bucket. ``expected`` is set
    once per bucket, from the first record seen: the size of its attached member list,
    else ``default_expected``.
    """
    buckets: dict[str, DayStats] = {}
    for record in records:
        day = day_name(record.date) or UNKNOWN_DAY

        stats = buckets.get(day)
        if stats is None:
            expected = len(record.members) if record.members is not None else default_expected
            stats = DayStats(expected=expected)
            buckets[day] = stats

        if record.status == AttendanceStatus.PRESENT:
            stats.present += 1
        elif record.status == AttendanceStatus.ABSENT:
            stats.absent += 1
        elif record.status == AttendanceStatus.LATE:
            stats.late += 1
    return buckets


def to_chart_series(buckets: Mapping[str, DayStats]) -> list[ChartPoint]:
    """Exactly seven points, Sun..Sat; days missing from ``buckets`` are all zero."""
    series = []
    for day in WEEKDAYS:
        stats = buckets.get(day)
        if stats is None:
            series.append(ChartPoint(day=day, present=0, absent=0, late=0, expected=0))
            continue
        series.append(
            ChartPoint(
                day=day,
                present=stats.present,
                absent=stats.absent,
                late=stats.late,
                expected=stats.expected,
            )
        )
    return series


def _session_start(record: AttendanceRecord, sessions: Mapping[str, Session]) -> Optional[datetime]:
    session = record.session or sessions.get(record.session_id)
    return to_local_naive(session.start_time) if session else None


def earliest_arrivals(
    records: Sequence[AttendanceRecord],
    limit: int = DEFAULT_EARLY_ARRIVAL_LIMIT,
    *,
    sessions: Optional[Mapping[str, Session]] = None,
) -> list[AttendanceRecord]:
    """Present records that arrived before their session started, earliest first.

    Only records carrying a non-empty member list qualify. The session start comes from
    the embedded session snapshot, falling back to ``sessions`` by id; records whose
    session cannot be resolved are skipped.
    """
    sessions = sessions or {}
    early = []
    for record in records:
        if record.status != AttendanceStatus.PRESENT or not record.members:
            continue
        if record.time_of_arrival is None:
            continue
        start = _session_start(record, sessions)
        arrival = to_local_naive(record.time_of_arrival)
        if start is not None and arrival < start:
            early.append((arrival, record))

    early.sort(key=lambda pair: pair[0])
    return [record for _, record in early[: max(limit, 0)]]
