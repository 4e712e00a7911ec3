from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..attendance.model import AttendanceRecord


@dataclass(frozen=True)
class UserRef:
    """User snapshot embedded in a member or used as a session creator."""

    id: str
    name: str
    email: str
    role: str
    profile_picture: Optional[str] = None


@dataclass(frozen=True, kw_only=True)
class Member:
    """Attendance participant: a user plus minority/guardian details and history.

    Guardian fields are only meaningful when ``is_minor`` is true. The store does not
    enforce this; MemberService checks it before committing.
    """

    id: str
    user: UserRef
    department: Optional[str] = None
    is_minor: bool = False
    guardian_name: Optional[str] = None
    guardian_email: Optional[str] = None
    guardian_phone: Optional[str] = None
    attendance_records: tuple[AttendanceRecord, ...] = ()
