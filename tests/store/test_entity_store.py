from __future__ import annotations

from datetime import datetime

from attendance_dashboard.core.enums import AttendanceStatus, Role
from attendance_dashboard.store.entity_store import EntityStore


def test_add_assigns_id_and_created_at(store, fixed_now):
    student = store.add_student(name="Ama Mensah", email="ama@demo.com")

    assert student.id
    assert student.created_at == fixed_now
    assert student.role == Role.STUDENT
    assert store.get_student(student.id) == student


def test_ids_are_never_reused():
    issued = iter(["a", "a", "b", "b", "c"])
    store = EntityStore(id_factory=lambda: next(issued))

    first = store.add_admin(name="Root", email="root@demo.com")
    second = store.add_admin(name="Ops", email="ops@demo.com")
    store.remove_admin(first.id)
    third = store.add_admin(name="Sec", email="sec@demo.com")

    assert [first.id, second.id, third.id] == ["a", "b", "c"]


def test_update_merges_only_supplied_fields(store, student):
    store.update_student(student.id, phone="+233 24 123 4567")

    updated = store.get_student(student.id)
    assert updated.phone == "+233 24 123 4567"
    assert updated.name == student.name
    assert updated.email == student.email
    assert updated.created_at == student.created_at


def test_update_unknown_id_is_noop(store, student):
    before = store.snapshot()
    store.update_student("missing", name="X")
    store.update_course("missing", name="X")
    assert store.snapshot() == before


def test_update_cannot_touch_enrollment_lists(store, student, course):
    store.update_student(student.id, enrolled_courses=(course.id,))
    store.update_course(course.id, enrolled_students=(student.id,))

    assert store.get_student(student.id).enrolled_courses == ()
    assert store.get_course(course.id).enrolled_students == ()


def test_remove_is_idempotent(store, student):
    store.remove_student(student.id)
    once = store.students
    store.remove_student(student.id)

    assert store.students == once
    assert store.get_student(student.id) is None


def test_get_all_users_in_role_order(store, lecturer, student):
    admin = store.add_admin(name="Root", email="root@demo.com", permissions=("users",))

    users = store.get_all_users()

    assert [u.id for u in users] == [student.id, lecturer.id, admin.id]
    assert [u.role for u in users] == [Role.STUDENT, Role.LECTURER, Role.SYSTEM_ADMIN]


def test_capabilities_follow_role(student, lecturer):
    assert student.is_enrollable and not student.teaches_courses
    assert lecturer.teaches_courses and not lecturer.is_enrollable


def test_delete_user_dispatches_on_role(store, lecturer):
    store.delete_user(lecturer.id, "lecturer")
    assert store.get_lecturer(lecturer.id) is None


def test_add_course_links_lecturer(store, course, lecturer):
    assert store.get_lecturer(lecturer.id).assigned_courses == (course.id,)


def test_remove_student_clears_course_side(store, student, course):
    store.enroll_student(student.id, course.id)
    store.remove_student(student.id)

    assert store.get_course(course.id).enrolled_students == ()


def test_remove_course_clears_student_and_lecturer_side(store, student, course, lecturer):
    store.enroll_student(student.id, course.id)
    store.remove_course(course.id)

    assert store.get_student(student.id).enrolled_courses == ()
    assert store.get_lecturer(lecturer.id).assigned_courses == ()


def test_attendance_requires_known_member_and_session(store, member, session):
    assert store.add_attendance_record(
        member_id="ghost", session_id=session.id, date="2025-11-16", status=AttendanceStatus.PRESENT
    ) is None
    assert store.add_attendance_record(
        member_id=member.id, session_id="ghost", date="2025-11-16", status=AttendanceStatus.PRESENT
    ) is None
    assert store.attendance == ()


def test_attendance_is_mirrored_on_member_and_session(store, member, session):
    record = store.add_attendance_record(
        member_id=member.id,
        session_id=session.id,
        date=datetime(2025, 11, 16, 7, 55),
        time_of_arrival=datetime(2025, 11, 16, 7, 55),
        status=AttendanceStatus.PRESENT,
    )

    assert store.get_member(member.id).attendance_records == (record,)
    assert store.get_session(session.id).attendance == (record,)

    store.update_attendance_status(record.id, AttendanceStatus.LATE)
    assert store.get_member(member.id).attendance_records[0].status == AttendanceStatus.LATE

    store.remove_attendance_record(record.id)
    assert store.get_member(member.id).attendance_records == ()
    assert store.get_session(session.id).attendance == ()


def test_partial_update_changes_only_status(store, member, session):
    record = store.add_attendance_record(
        member_id=member.id,
        session_id=session.id,
        date="2025-11-16",
        time_of_arrival=datetime(2025, 11, 16, 7, 55),
        status=AttendanceStatus.PRESENT,
        members=(member.id,),
    )

    store.update_attendance(record.id, status=AttendanceStatus.LATE)

    updated = store.get_attendance(record.id)
    assert updated.status == AttendanceStatus.LATE
    assert updated.date == record.date
    assert updated.time_of_arrival == record.time_of_arrival
    assert updated.members == record.members
    assert updated.member_id == record.member_id


def test_removing_session_keeps_attendance(store, member, session):
    record = store.add_attendance_record(
        member_id=member.id, session_id=session.id, date="2025-11-16", status=AttendanceStatus.ABSENT
    )
    store.remove_session(session.id)

    assert store.get_attendance(record.id) == record


def test_reassigning_course_moves_it_between_lecturers(store, course, lecturer):
    other = store.add_lecturer(name="Dr. Akosua Mensah", email="mensah@demo.com", staff_number="STF002")

    store.update_course(course.id, lecturer_id=other.id, lecturer_name=other.name)

    assert store.get_course(course.id).lecturer_id == other.id
    assert store.get_lecturer(lecturer.id).assigned_courses == ()
    assert store.get_lecturer(other.id).assigned_courses == (course.id,)


def test_new_student_initial_courses_are_mirrored(store, course):
    student = store.add_student(
        name="Ama Owusu",
        email="ama@demo.com",
        enrolled_courses=(course.id, "ghost", course.id),
    )

    assert student.enrolled_courses == (course.id,)
    assert store.get_course(course.id).enrolled_students == (student.id,)
