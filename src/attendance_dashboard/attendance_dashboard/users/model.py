from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True, kw_only=True)
class User:
    """Domain entity: common fields shared by every user variant.

    Note: Plain data object, only the entity store creates or replaces it.
    """

    id: str
    name: str
    email: str
    role: Role
    created_at: datetime
    profile_picture: Optional[str] = None
    department: Optional[str] = None
    phone: Optional[str] = None

    @property
    def is_enrollable(self) -> bool:
        return False

    @property
    def teaches_courses(self) -> bool:
        return False

    @property
    def administers(self) -> bool:
        return False


@dataclass(frozen=True, kw_only=True)
class Student(User):
    role: Role = Role.STUDENT
    student_number: str = ""
    year_group: int = 1
    enrolled_courses: tuple[str, ...] = ()
    attendance_rate: float = 0.0

    @property
    def is_enrollable(self) -> bool:
        return True


@dataclass(frozen=True, kw_only=True)
class Lecturer(User):
    role: Role = Role.LECTURER
    staff_number: str = ""
    assigned_courses: tuple[str, ...] = ()
    hourly_rate: float = 0.0
    total_hours_worked: float = 0.0
    total_earnings: float = 0.0

    @property
    def teaches_courses(self) -> bool:
        return True


@dataclass(frozen=True, kw_only=True)
class SystemAdmin(User):
    role: Role = Role.SYSTEM_ADMIN
    admin_number: str = ""
    permissions: tuple[str, ...] = field(default_factory=tuple)

    @property
    def administers(self) -> bool:
        return True
