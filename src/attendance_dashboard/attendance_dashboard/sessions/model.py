from __future__ import annotations

import secrets
import string
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..core.enums import SessionStatus, SessionType

TOKEN_LENGTH = 6
_TOKEN_ALPHABET = string.ascii_uppercase + string.digits


@dataclass(frozen=True)
class SessionCreator:
    id: str
    name: str
    email: str
    role: str


@dataclass(frozen=True, kw_only=True)
class Session:
    """Domain entity: a check-in or check-out event that attendance belongs to."""

    id: str
    name: str
    type: SessionType
    start_time: datetime
    end_time: datetime
    creator: SessionCreator
    created_at: datetime
    status: SessionStatus = SessionStatus.SCHEDULED
    department: Optional[str] = None
    location: Optional[str] = None
    course_id: Optional[str] = None
    course_name: Optional[str] = None
    course_code: Optional[str] = None
    expected_count: int = 0
    actual_count: int = 0
    late_threshold: int = 15
    absent_threshold: int = 30
    token: str = ""
    attendance: tuple[AttendanceRecord, ...] = ()


def new_access_token() -> str:
    return "".join(secrets.choice(_TOKEN_ALPHABET) for _ in range(TOKEN_LENGTH))
