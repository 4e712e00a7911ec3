from __future__ import annotations

from typing import Optional

from ..attendance.model import AttendanceRecord
from ..core.enums import Role, SessionStatus
from ..courses.model import Course
from ..sessions.model import Session
from ..store.entity_store import EntityStore
from ..users.model import User


class QueryFacade:
    """Read-only lookups over the current store contents.

    Nothing is cached: every call filters the latest collections.
    """

    def __init__(self, store: EntityStore):
        self._store = store

    def courses_by_lecturer(self, lecturer_id: str) -> list[Course]:
        return [c for c in self._store.courses if c.lecturer_id == lecturer_id]

    def courses_by_student(self, student_id: str) -> list[Course]:
        return [c for c in self._store.courses if student_id in c.enrolled_students]

    def course_by_id(self, course_id: str) -> Optional[Course]:
        return next((c for c in self._store.courses if c.id == course_id), None)

    def student_courses(self, student_id: str) -> list[Course]:
        """Courses listed on the student's own enrollment list, in that order."""
        student = self._store.get_student(student_id)
        if student is None:
            return []
        courses = (self._store.get_course(course_id) for course_id in student.enrolled_courses)
        return [c for c in courses if c is not None]

    def users_by_role(self, role: Role) -> list[User]:
        role = Role(role)
        return [u for u in self._store.get_all_users() if u.role == role]

    def sessions_by_creator(self, user_id: str) -> list[Session]:
        return [s for s in self._store.sessions if s.creator.id == user_id]

    def sessions_by_status(self, status: SessionStatus) -> list[Session]:
        status = SessionStatus(status)
        return [s for s in self._store.sessions if s.status == status]

    def attendance_for_member(self, member_id: str) -> list[AttendanceRecord]:
        return [a for a in self._store.attendance if a.member_id == member_id]

    def attendance_for_session(self, session_id: str) -> list[AttendanceRecord]:
        return [a for a in self._store.attendance if a.session_id == session_id]
