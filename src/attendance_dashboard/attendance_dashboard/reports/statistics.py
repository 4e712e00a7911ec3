from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, timedelta
from typing import Iterable, Sequence

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import parse_datetime, to_local_naive
from ..core.enums import AttendanceStatus
from ..courses.model import Course
from ..members.model import Member

_ATTENDED = (AttendanceStatus.PRESENT, AttendanceStatus.LATE)


@dataclass(frozen=True)
class AttendanceSummary:
    present: int
    late: int
    absent: int
    excused: int
    total: int
    rate: int

    def to_dict(self) -> dict:
        return asdict(self)


def filter_recent(records: Iterable[AttendanceRecord], days: int, *, now: datetime) -> list[AttendanceRecord]:
    """Records dated on or after ``now - days``; undated records are dropped."""
    cutoff = to_local_naive(now) - timedelta(days=days)
    out = []
    for record in records:
        when = parse_datetime(record.date)
        if when is None:
            continue
        if to_local_naive(when) >= cutoff:
            out.append(record)
    return out


def summarize(records: Sequence[AttendanceRecord]) -> AttendanceSummary:
    counts = {status: 0 for status in AttendanceStatus}
    for record in records:
        counts[record.status] += 1

    total = len(records)
    attended = counts[AttendanceStatus.PRESENT] + counts[AttendanceStatus.LATE]
    return AttendanceSummary(
        present=counts[AttendanceStatus.PRESENT],
        late=counts[AttendanceStatus.LATE],
        absent=counts[AttendanceStatus.ABSENT],
        excused=counts[AttendanceStatus.EXCUSED],
        total=total,
        rate=round(attended / total * 100) if total else 0,
    )


def rate_by_course(courses: Iterable[Course], records: Sequence[AttendanceRecord]) -> list[dict]:
    rows = []
    for course in courses:
        course_records = [r for r in records if r.course_code == course.code]
        attended = sum(1 for r in course_records if r.status in _ATTENDED)
        rows.append(
            {
                "course_id": course.id,
                "code": course.code,
                "name": course.name,
                "records": len(course_records),
                "rate": round(attended / len(course_records) * 100) if course_records else 0,
            }
        )
    return rows


def member_attendance_rate(member: Member) -> float:
    """Share of the member's records that are present or late, in percent."""
    records = member.attendance_records
    if not records:
        return 0.0
    attended = sum(1 for r in records if r.status in _ATTENDED)
    return round(attended / len(records) * 100, 2)
