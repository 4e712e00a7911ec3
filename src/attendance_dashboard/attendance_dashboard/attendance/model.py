from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import TYPE_CHECKING, Optional, Union

from ..core.enums import AttendanceSource, AttendanceStatus

if TYPE_CHECKING:
    from ..sessions.model import Session


@dataclass(frozen=True, kw_only=True)
class AttendanceRecord:
    """Domain entity: one attendance event of a member in a session.

    ``date`` is kept as supplied (datetime, date or ISO string); readers parse it and
    must tolerate values that do not parse. ``members`` is the member list attached to
    the record when it was taken, None when it was never attached.
    """

    id: str
    member_id: str
    session_id: str
    date: Union[datetime, date, str]
    status: AttendanceStatus
    time_of_arrival: Optional[datetime] = None
    time_of_departure: Optional[datetime] = None
    session: Optional["Session"] = None
    members: Optional[tuple[str, ...]] = None
    member_name: Optional[str] = None
    member_email: Optional[str] = None
    session_name: Optional[str] = None
    course_code: Optional[str] = None
    course_name: Optional[str] = None
    source: AttendanceSource = AttendanceSource.ADMIN
    confidence_score: Optional[float] = None
