from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from functools import wraps
from typing import Any, Callable, Optional

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import now_local
from ..common.ids import new_id
from ..core.enums import AttendanceStatus, Role, SessionStatus
from ..courses.model import Course
from ..members.model import Member
from ..sessions.model import Session, new_access_token
from ..sessions.state import can_transition
from ..users.model import Lecturer, Student, SystemAdmin, User
from .collection import EntityCollection

logger = logging.getLogger(__name__)


def _synchronized(method):
    """Run a store method while holding the snapshot lock."""

    @wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper


@dataclass(frozen=True)
class StoreSnapshot:
    """Immutable view of every collection, one table per entity type."""

    students: tuple[Student, ...]
    lecturers: tuple[Lecturer, ...]
    admins: tuple[SystemAdmin, ...]
    courses: tuple[Course, ...]
    sessions: tuple[Session, ...]
    members: tuple[Member, ...]
    attendance: tuple[AttendanceRecord, ...]


class EntityStore:
    """Sole owner and mutator of the in-memory entity collections.

    Create operations assign ids (and creation timestamps where the entity has one).
    Updates merge only the supplied fields; unknown ids on update/remove are no-ops.
    Relationship fields (enrollment lists, session status) are only changed through
    the dedicated operations so both sides stay consistent.

    All mutators hold one re-entrant lock, which serializes concurrent callers such as
    threaded request handlers.
    """

    def __init__(
        self,
        *,
        students: tuple[Student, ...] = (),
        lecturers: tuple[Lecturer, ...] = (),
        admins: tuple[SystemAdmin, ...] = (),
        courses: tuple[Course, ...] = (),
        sessions: tuple[Session, ...] = (),
        members: tuple[Member, ...] = (),
        attendance: tuple[AttendanceRecord, ...] = (),
        clock: Callable[[], datetime] = now_local,
        id_factory: Callable[[], str] = new_id,
    ):
        self._lock = threading.RLock()
        self._clock = clock
        self._id_factory = id_factory

        self._students: EntityCollection[Student] = EntityCollection("students", students)
        self._lecturers: EntityCollection[Lecturer] = EntityCollection("lecturers", lecturers)
        self._admins: EntityCollection[SystemAdmin] = EntityCollection("admins", admins)
        self._courses: EntityCollection[Course] = EntityCollection("courses", courses)
        self._sessions: EntityCollection[Session] = EntityCollection("sessions", sessions)
        self._members: EntityCollection[Member] = EntityCollection("members", members)
        self._attendance: EntityCollection[AttendanceRecord] = EntityCollection("attendance", attendance)

        self._issued_ids: set[str] = set()
        for collection in self._collections():
            self._issued_ids.update(item.id for item in collection)

    def _collections(self) -> tuple[EntityCollection, ...]:
        return (
            self._students,
            self._lecturers,
            self._admins,
            self._courses,
            self._sessions,
            self._members,
            self._attendance,
        )

    def _issue_id(self) -> str:
        # Ids are never handed out twice, even after the entity is removed.
        entity_id = self._id_factory()
        while entity_id in self._issued_ids:
            entity_id = self._id_factory()
        self._issued_ids.add(entity_id)
        return entity_id

    @staticmethod
    def _without(fields: dict[str, Any], protected: frozenset[str], collection: str) -> dict[str, Any]:
        rejected = protected.intersection(fields)
        if rejected:
            logger.info("%s: ignoring relationship fields in update: %s", collection, ", ".join(sorted(rejected)))
        return {k: v for k, v in fields.items() if k not in protected}

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def students(self) -> tuple[Student, ...]:
        return self._students.all()

    @property
    def lecturers(self) -> tuple[Lecturer, ...]:
        return self._lecturers.all()

    @property
    def admins(self) -> tuple[SystemAdmin, ...]:
        return self._admins.all()

    @property
    def courses(self) -> tuple[Course, ...]:
        return self._courses.all()

    @property
    def sessions(self) -> tuple[Session, ...]:
        return self._sessions.all()

    @property
    def members(self) -> tuple[Member, ...]:
        return self._members.all()

    @property
    def attendance(self) -> tuple[AttendanceRecord, ...]:
        return self._attendance.all()

    def get_student(self, student_id: str) -> Optional[Student]:
        return self._students.get(student_id)

    def get_lecturer(self, lecturer_id: str) -> Optional[Lecturer]:
        return self._lecturers.get(lecturer_id)

    def get_admin(self, admin_id: str) -> Optional[SystemAdmin]:
        return self._admins.get(admin_id)

    def get_user(self, user_id: str) -> Optional[User]:
        return self._students.get(user_id) or self._lecturers.get(user_id) or self._admins.get(user_id)

    def get_course(self, course_id: str) -> Optional[Course]:
        return self._courses.get(course_id)

    def get_session(self, session_id: str) -> Optional[Session]:
        return self._sessions.get(session_id)

    def get_member(self, member_id: str) -> Optional[Member]:
        return self._members.get(member_id)

    def get_attendance(self, record_id: str) -> Optional[AttendanceRecord]:
        return self._attendance.get(record_id)

    def get_all_users(self) -> list[User]:
        """Students, then lecturers, then admins, in store order."""
        with self._lock:
            return [*self._students, *self._lecturers, *self._admins]

    def snapshot(self) -> StoreSnapshot:
        with self._lock:
            return StoreSnapshot(
                students=self._students.all(),
                lecturers=self._lecturers.all(),
                admins=self._admins.all(),
                courses=self._courses.all(),
                sessions=self._sessions.all(),
                members=self._members.all(),
                attendance=self._attendance.all(),
            )

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    @_synchronized
    def add_student(self, **draft: Any) -> Student:
        requested = tuple(dict.fromkeys(draft.pop("enrolled_courses", ())))
        enrolled = tuple(c for c in requested if c in self._courses)
        if len(enrolled) != len(requested):
            logger.info("students: dropped unknown courses from new student enrollment")

        student = self._students.add(
            Student(id=self._issue_id(), created_at=self._clock(), enrolled_courses=enrolled, **draft)
        )
        for course_id in enrolled:
            course = self._courses.get(course_id)
            if student.id not in course.enrolled_students:
                self._courses.update(course_id, {"enrolled_students": course.enrolled_students + (student.id,)})
        return student

    @_synchronized
    def add_lecturer(self, **draft: Any) -> Lecturer:
        return self._lecturers.add(Lecturer(id=self._issue_id(), created_at=self._clock(), **draft))

    @_synchronized
    def add_admin(self, **draft: Any) -> SystemAdmin:
        return self._admins.add(SystemAdmin(id=self._issue_id(), created_at=self._clock(), **draft))

    @_synchronized
    def update_student(self, student_id: str, **fields: Any) -> None:
        self._students.update(student_id, self._without(fields, frozenset({"enrolled_courses"}), "students"))

    @_synchronized
    def update_lecturer(self, lecturer_id: str, **fields: Any) -> None:
        self._lecturers.update(lecturer_id, fields)

    @_synchronized
    def update_admin(self, admin_id: str, **fields: Any) -> None:
        self._admins.update(admin_id, fields)

    @_synchronized
    def remove_student(self, student_id: str) -> None:
        if not self._students.remove(student_id):
            return
        for course in self._courses.filter(lambda c: student_id in c.enrolled_students):
            remaining = tuple(s for s in course.enrolled_students if s != student_id)
            self._courses.update(course.id, {"enrolled_students": remaining})

    @_synchronized
    def remove_lecturer(self, lecturer_id: str) -> None:
        self._lecturers.remove(lecturer_id)

    @_synchronized
    def remove_admin(self, admin_id: str) -> None:
        self._admins.remove(admin_id)

    def delete_user(self, user_id: str, role: Role) -> None:
        role = Role(role)
        if role == Role.STUDENT:
            self.remove_student(user_id)
        elif role == Role.LECTURER:
            self.remove_lecturer(user_id)
        else:
            self.remove_admin(user_id)

    # ------------------------------------------------------------------
    # Courses
    # ------------------------------------------------------------------

    @_synchronized
    def add_course(self, **draft: Any) -> Course:
        requested = tuple(dict.fromkeys(draft.pop("enrolled_students", ())))
        enrolled = tuple(s for s in requested if s in self._students)
        if len(enrolled) != len(requested):
            logger.info("courses: dropped unknown students from new course enrollment")

        course = self._courses.add(
            Course(id=self._issue_id(), created_at=self._clock(), enrolled_students=enrolled, **draft)
        )
        for student_id in enrolled:
            self._add_course_to_student(student_id, course.id)

        lecturer = self._lecturers.get(course.lecturer_id)
        if lecturer and course.id not in lecturer.assigned_courses:
            self._lecturers.update(lecturer.id, {"assigned_courses": lecturer.assigned_courses + (course.id,)})
        return course

    @_synchronized
    def update_course(self, course_id: str, **fields: Any) -> None:
        previous = self._courses.get(course_id)
        updated = self._courses.update(course_id, self._without(fields, frozenset({"enrolled_students"}), "courses"))
        if updated is None or updated.lecturer_id == previous.lecturer_id:
            return

        old = self._lecturers.get(previous.lecturer_id)
        if old and course_id in old.assigned_courses:
            remaining = tuple(c for c in old.assigned_courses if c != course_id)
            self._lecturers.update(old.id, {"assigned_courses": remaining})

        new = self._lecturers.get(updated.lecturer_id)
        if new and course_id not in new.assigned_courses:
            self._lecturers.update(new.id, {"assigned_courses": new.assigned_courses + (course_id,)})

    @_synchronized
    def remove_course(self, course_id: str) -> None:
        if not self._courses.remove(course_id):
            return
        for student in self._students.filter(lambda s: course_id in s.enrolled_courses):
            remaining = tuple(c for c in student.enrolled_courses if c != course_id)
            self._students.update(student.id, {"enrolled_courses": remaining})
        for lecturer in self._lecturers.filter(lambda l: course_id in l.assigned_courses):
            remaining = tuple(c for c in lecturer.assigned_courses if c != course_id)
            self._lecturers.update(lecturer.id, {"assigned_courses": remaining})

    # ------------------------------------------------------------------
    # Enrollment
    # ------------------------------------------------------------------

    def _add_course_to_student(self, student_id: str, course_id: str) -> None:
        student = self._students.get(student_id)
        if student and course_id not in student.enrolled_courses:
            self._students.update(student_id, {"enrolled_courses": student.enrolled_courses + (course_id,)})

    @_synchronized
    def enroll_student(self, student_id: str, course_id: str) -> bool:
        """Enroll on both sides, or do nothing and return False if either id is unknown."""
        student = self._students.get(student_id)
        course = self._courses.get(course_id)
        if student is None or course is None:
            logger.info("enroll rejected: student=%s course=%s not found", student_id, course_id)
            return False

        self._add_course_to_student(student_id, course_id)
        if student_id not in course.enrolled_students:
            self._courses.update(course_id, {"enrolled_students": course.enrolled_students + (student_id,)})
        return True

    @_synchronized
    def unenroll_student(self, student_id: str, course_id: str) -> bool:
        student = self._students.get(student_id)
        course = self._courses.get(course_id)
        if student is None or course is None:
            logger.info("unenroll rejected: student=%s course=%s not found", student_id, course_id)
            return False

        if course_id in student.enrolled_courses:
            remaining = tuple(c for c in student.enrolled_courses if c != course_id)
            self._students.update(student_id, {"enrolled_courses": remaining})
        if student_id in course.enrolled_students:
            remaining = tuple(s for s in course.enrolled_students if s != student_id)
            self._courses.update(course_id, {"enrolled_students": remaining})
        return True

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    @_synchronized
    def add_session(self, **draft: Any) -> Session:
        draft.setdefault("token", new_access_token())
        return self._sessions.add(Session(id=self._issue_id(), created_at=self._clock(), **draft))

    @_synchronized
    def update_session(self, session_id: str, **fields: Any) -> None:
        self._sessions.update(session_id, self._without(fields, frozenset({"status", "attendance"}), "sessions"))

    @_synchronized
    def transition_session(self, session_id: str, status: SessionStatus) -> bool:
        """Move a session along the declared transition table.

        Unknown sessions and transitions outside the table are rejected (False) and
        leave the session untouched.
        """
        session = self._sessions.get(session_id)
        if session is None:
            logger.info("sessions: transition skipped, no session %s", session_id)
            return False

        target = SessionStatus(status)
        if not can_transition(session.status, target):
            logger.info("sessions: rejected %s -> %s for %s", session.status.value, target.value, session_id)
            return False

        self._sessions.update(session_id, {"status": target})
        return True

    def close_session(self, session_id: str) -> bool:
        return self.transition_session(session_id, SessionStatus.CLOSED)

    @_synchronized
    def remove_session(self, session_id: str) -> None:
        self._sessions.remove(session_id)

    # ------------------------------------------------------------------
    # Members
    # ------------------------------------------------------------------

    @_synchronized
    def add_member(self, **draft: Any) -> Member:
        return self._members.add(Member(id=self._issue_id(), **draft))

    @_synchronized
    def update_member(self, member_id: str, **fields: Any) -> None:
        self._members.update(member_id, self._without(fields, frozenset({"attendance_records"}), "members"))

    @_synchronized
    def remove_member(self, member_id: str) -> None:
        self._members.remove(member_id)

    # ------------------------------------------------------------------
    # Attendance
    # ------------------------------------------------------------------

    def _is_participant(self, member_id: str) -> bool:
        return member_id in self._members or self.get_user(member_id) is not None

    def _attach(self, record: AttendanceRecord) -> None:
        """Mirror ``record`` into the member history and the session roll."""
        member = self._members.get(record.member_id)
        if member:
            history = tuple(r for r in member.attendance_records if r.id != record.id) + (record,)
            self._members.update(member.id, {"attendance_records": history})

        session = self._sessions.get(record.session_id)
        if session:
            roll = tuple(r for r in session.attendance if r.id != record.id) + (record,)
            self._sessions.update(session.id, {"attendance": roll})

    def _replace_attached(self, record: AttendanceRecord) -> None:
        member = self._members.get(record.member_id)
        if member:
            history = tuple(record if r.id == record.id else r for r in member.attendance_records)
            self._members.update(member.id, {"attendance_records": history})

        session = self._sessions.get(record.session_id)
        if session:
            roll = tuple(record if r.id == record.id else r for r in session.attendance)
            self._sessions.update(session.id, {"attendance": roll})

    def _detach(self, record: AttendanceRecord) -> None:
        member = self._members.get(record.member_id)
        if member:
            history = tuple(r for r in member.attendance_records if r.id != record.id)
            self._members.update(member.id, {"attendance_records": history})

        session = self._sessions.get(record.session_id)
        if session:
            roll = tuple(r for r in session.attendance if r.id != record.id)
            self._sessions.update(session.id, {"attendance": roll})

    @_synchronized
    def add_attendance_record(self, **draft: Any) -> Optional[AttendanceRecord]:
        """Store a record for an existing member and session; None when either is unknown."""
        member_id = draft.get("member_id")
        session_id = draft.get("session_id")
        if not self._is_participant(member_id) or session_id not in self._sessions:
            logger.info("attendance rejected: member=%s session=%s not found", member_id, session_id)
            return None

        record = self._attendance.add(AttendanceRecord(id=self._issue_id(), **draft))
        self._attach(record)
        return record

    @_synchronized
    def update_attendance(self, record_id: str, **fields: Any) -> None:
        fields = self._without(fields, frozenset({"member_id", "session_id"}), "attendance")
        updated = self._attendance.update(record_id, fields)
        if updated:
            self._replace_attached(updated)

    def update_attendance_status(self, record_id: str, status: AttendanceStatus) -> None:
        self.update_attendance(record_id, status=AttendanceStatus(status))

    @_synchronized
    def remove_attendance_record(self, record_id: str) -> None:
        record = self._attendance.get(record_id)
        if record and self._attendance.remove(record_id):
            self._detach(record)
