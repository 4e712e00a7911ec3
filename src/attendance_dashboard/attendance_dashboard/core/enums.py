from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role tag, kept on every user variant."""

    STUDENT = "student"
    LECTURER = "lecturer"
    SYSTEM_ADMIN = "system_admin"


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    EXCUSED = "excused"


class AttendanceSource(str, Enum):
    KIOSK = "kiosk"
    MOBILE = "mobile"
    ADMIN = "admin"


class SessionType(str, Enum):
    CHECK_IN = "check-in"
    CHECK_OUT = "check-out"


class SessionStatus(str, Enum):
    """Lifecycle of a session. Transitions are declared in sessions.state."""

    ACTIVE = "active"
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CLOSED = "closed"
