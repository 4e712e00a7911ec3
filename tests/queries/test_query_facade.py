from __future__ import annotations

from attendance_dashboard.core.enums import AttendanceStatus, Role, SessionStatus
from attendance_dashboard.queries.facade import QueryFacade


def test_enroll_unenroll_scenario(store, student, course, lecturer):
    queries = QueryFacade(store)
    assert queries.courses_by_student(student.id) == []

    store.enroll_student(student.id, course.id)

    enrolled = store.get_course(course.id)
    assert queries.courses_by_student(student.id) == [enrolled]
    assert enrolled in queries.courses_by_lecturer(lecturer.id)
    assert queries.student_courses(student.id) == [enrolled]

    store.unenroll_student(student.id, course.id)

    assert queries.courses_by_student(student.id) == []
    assert queries.student_courses(student.id) == []
    assert all(student.id not in c.enrolled_students for c in queries.courses_by_lecturer(lecturer.id))


def test_course_by_id_not_found(store, course):
    queries = QueryFacade(store)

    assert queries.course_by_id(course.id) == course
    assert queries.course_by_id("missing") is None


def test_users_by_role(store, student, lecturer):
    queries = QueryFacade(store)

    assert queries.users_by_role(Role.STUDENT) == [student]
    assert queries.users_by_role("lecturer") == [store.get_lecturer(lecturer.id)]
    assert queries.users_by_role(Role.SYSTEM_ADMIN) == []


def test_session_and_attendance_lookups(store, session, member, lecturer):
    queries = QueryFacade(store)
    record = store.add_attendance_record(
        member_id=member.id, session_id=session.id, date="2025-11-16", status=AttendanceStatus.PRESENT
    )

    assert [s.id for s in queries.sessions_by_creator(lecturer.id)] == [session.id]
    assert [s.id for s in queries.sessions_by_status(SessionStatus.SCHEDULED)] == [session.id]
    assert queries.attendance_for_member(member.id) == [record]
    assert queries.attendance_for_session(session.id) == [record]
    assert queries.attendance_for_session("missing") == []
