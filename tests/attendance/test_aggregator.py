from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from attendance_dashboard.attendance.aggregator import (
    ChartPoint,
    DayStats,
    day_name,
    earliest_arrivals,
    group_by_day,
    to_chart_series,
)
from attendance_dashboard.attendance.model import AttendanceRecord
from attendance_dashboard.core.enums import AttendanceStatus, SessionType
from attendance_dashboard.sessions.model import Session, SessionCreator

SESSION_START = datetime(2025, 11, 17, 8, 0)


def _session() -> Session:
    return Session(
        id="SES001",
        name="Lecture",
        type=SessionType.CHECK_IN,
        start_time=SESSION_START,
        end_time=SESSION_START + timedelta(hours=2),
        creator=SessionCreator(id="LEC001", name="Dr. Addo", email="lecturer@demo.com", role="lecturer"),
        created_at=datetime(2025, 11, 16, 10, 0),
    )


def _record(rid: str, *, date_value="2025-11-16", status=AttendanceStatus.PRESENT, **kwargs) -> AttendanceRecord:
    return AttendanceRecord(id=rid, member_id="m1", session_id="SES001", date=date_value, status=status, **kwargs)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("2025-11-16", "Sun"),
        ("2025-11-17T08:05:00", "Mon"),
        (date(2025, 11, 22), "Sat"),
        (datetime(2025, 11, 19, 23, 59), "Wed"),
        ("not-a-date", None),
        ("", None),
        (None, None),
    ],
)
def test_day_name(value, expected):
    assert day_name(value) == expected


def test_day_name_uses_local_calendar_for_aware_values():
    value = datetime(2025, 11, 16, 12, 0, tzinfo=timezone.utc)
    assert day_name(value) == day_name(value.astimezone().replace(tzinfo=None))


def test_group_by_day_buckets_sunday_record():
    buckets = group_by_day([_record("a")])

    assert buckets == {"Sun": DayStats(present=1, absent=0, late=0, expected=None)}


def test_group_by_day_seeds_expected_from_first_record():
    records = [
        _record("a", members=("m1", "m2", "m3")),
        _record("b", status=AttendanceStatus.LATE, members=("m1",)),
        _record("c", date_value="2025-11-17", status=AttendanceStatus.ABSENT),
    ]

    buckets = group_by_day(records, default_expected=100)

    assert buckets["Sun"] == DayStats(present=1, absent=0, late=1, expected=3)
    assert buckets["Mon"] == DayStats(present=0, absent=1, late=0, expected=100)


def test_group_by_day_routes_bad_dates_to_unknown():
    buckets = group_by_day([_record("a", date_value="31/02/2025"), _record("b", date_value=None)])

    assert buckets == {"Unknown": DayStats(present=2, absent=0, late=0, expected=None)}


def test_group_by_day_ignores_excused_in_counters():
    buckets = group_by_day([_record("a", status=AttendanceStatus.EXCUSED)])
    assert buckets["Sun"] == DayStats()


def test_chart_series_empty_input_has_seven_zero_days():
    series = to_chart_series({})

    assert [p.day for p in series] == ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
    assert all(p.present == p.absent == p.late == p.expected == 0 for p in series)


def test_chart_series_fills_gaps_and_drops_unknown():
    series = to_chart_series({"Tue": DayStats(present=4, late=1, expected=10), "Unknown": DayStats(present=9)})

    assert len(series) == 7
    assert series[2] == ChartPoint(day="Tue", present=4, absent=0, late=1, expected=10)
    assert sum(p.present for p in series) == 4


def test_earliest_arrivals_only_early_present_with_members():
    early = _record("early", time_of_arrival=SESSION_START - timedelta(minutes=10), members=("m1",))
    after = _record("after", time_of_arrival=SESSION_START + timedelta(minutes=5), members=("m1",))
    no_members = _record("bare", time_of_arrival=SESSION_START - timedelta(minutes=30), members=())
    late = _record(
        "late",
        status=AttendanceStatus.LATE,
        time_of_arrival=SESSION_START - timedelta(minutes=40),
        members=("m1",),
    )

    result = earliest_arrivals([after, no_members, early, late], sessions={"SES001": _session()})

    assert result == [early]


def test_earliest_arrivals_sorted_and_limited():
    records = [
        _record(str(i), time_of_arrival=SESSION_START - timedelta(minutes=i), members=("m1",), session=_session())
        for i in range(1, 6)
    ]

    result = earliest_arrivals(records)

    assert [r.id for r in result] == ["5", "4", "3"]
    assert earliest_arrivals(records, limit=1)[0].id == "5"


def test_earliest_arrivals_skips_unresolvable_sessions():
    record = _record("x", time_of_arrival=SESSION_START - timedelta(minutes=5), members=("m1",))
    assert earliest_arrivals([record]) == []


def test_earliest_arrivals_accepts_aware_arrival_times():
    aware = datetime(2025, 11, 17, 7, 0, tzinfo=timezone.utc)
    naive = _record("naive", time_of_arrival=SESSION_START - timedelta(minutes=1), members=("m1",))
    utc = _record("utc", time_of_arrival=aware, members=("m1",))

    result = earliest_arrivals([naive, utc], sessions={"SES001": _session()})

    local = aware.astimezone().replace(tzinfo=None)
    expected = [naive]
    if local < SESSION_START:
        expected = sorted([naive, utc], key=lambda r: r.time_of_arrival.astimezone().replace(tzinfo=None))
    assert result == expected
