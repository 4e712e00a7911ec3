from __future__ import annotations

from datetime import datetime

import pytest

from attendance_dashboard.core.enums import SessionStatus, SessionType
from attendance_dashboard.members.model import UserRef
from attendance_dashboard.sessions.model import SessionCreator
from attendance_dashboard.store.entity_store import EntityStore


@pytest.fixture
def fixed_now() -> datetime:
    # Sunday
    return datetime(2025, 11, 16, 9, 0, 0)


@pytest.fixture
def store(fixed_now) -> EntityStore:
    return EntityStore(clock=lambda: fixed_now)


@pytest.fixture
def lecturer(store):
    return store.add_lecturer(name="Dr. Emmanuel Addo", email="lecturer@demo.com", staff_number="STF001")


@pytest.fixture
def student(store):
    return store.add_student(name="Kwame Asante", email="student@demo.com", student_number="CS2023001", year_group=2)


@pytest.fixture
def course(store, lecturer):
    return store.add_course(
        code="CS301",
        name="Data Structures & Algorithms",
        department="Computer Science",
        lecturer_id=lecturer.id,
        lecturer_name=lecturer.name,
        total_sessions=24,
    )


@pytest.fixture
def session(store, lecturer):
    return store.add_session(
        name="Data Structures - Lecture 12",
        type=SessionType.CHECK_IN,
        start_time=datetime(2025, 11, 16, 8, 0),
        end_time=datetime(2025, 11, 16, 10, 0),
        status=SessionStatus.SCHEDULED,
        creator=SessionCreator(id=lecturer.id, name=lecturer.name, email=lecturer.email, role="lecturer"),
        course_code="CS301",
        location="Block A, Room 101",
    )


@pytest.fixture
def member(store):
    return store.add_member(
        user=UserRef(id="STU001", name="Kwame Asante", email="student@demo.com", role="student"),
        department="Computer Science",
    )
