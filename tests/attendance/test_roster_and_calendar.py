from __future__ import annotations

from datetime import date

import pytest

from fakes import InMemoryAttendance, InMemoryProfiles, InMemoryStore
from school_attendance.attendance.service import AttendanceService
from school_attendance.core.enums import AttendanceStatus
from school_attendance.core.exceptions import NotFoundError


@pytest.fixture
def store():
    store = InMemoryStore()
    store.add_teacher("math@school.test", "Math")
    store.add_student("m2@school.test", "Math", 20)
    store.add_student("m1@school.test", "math", 10)
    store.add_student("b1@school.test", "Biology", 5)
    return store


@pytest.fixture
def svc(store):
    return AttendanceService(InMemoryAttendance(store), InMemoryProfiles(store))


def test_roster_for_unmarked_day_lists_everyone_as_null(svc):
    rows = svc.daily_attendance(teacher_email="math@school.test", day=date(2024, 5, 2))

    assert [r.roll_num for r in rows] == [10, 20]
    assert all(r.status is None for r in rows)


def test_roster_shows_that_days_marks_only(store, svc):
    store.mark(1, date(2024, 5, 2), AttendanceStatus.LATE)
    store.mark(2, date(2024, 5, 1), AttendanceStatus.ABSENT)
    store.mark(3, date(2024, 5, 2), AttendanceStatus.PRESENT)

    rows = svc.daily_attendance(teacher_email="math@school.test", day=date(2024, 5, 2))

    assert {r.id: r.status for r in rows} == {2: None, 1: AttendanceStatus.LATE}


def test_roster_requires_a_teacher_profile(svc):
    with pytest.raises(NotFoundError, match="Teacher profile not found"):
        svc.daily_attendance(teacher_email="m1@school.test", day=date(2024, 5, 2))


def test_calendar_returns_one_month_ascending(store, svc):
    store.mark(2, date(2024, 5, 20), AttendanceStatus.ABSENT)
    store.mark(2, date(2024, 5, 3), AttendanceStatus.PRESENT)
    store.mark(2, date(2024, 4, 30), AttendanceStatus.PRESENT)
    store.mark(2, date(2024, 6, 1), AttendanceStatus.PRESENT)
    store.mark(1, date(2024, 5, 4), AttendanceStatus.LATE)

    start, days = svc.calendar(student_email="m1@school.test", month=date(2024, 5, 1), today=date(2030, 1, 1))

    assert start == date(2024, 5, 1)
    assert [(d.day, d.status) for d in days] == [
        (date(2024, 5, 3), AttendanceStatus.PRESENT),
        (date(2024, 5, 20), AttendanceStatus.ABSENT),
    ]


def test_calendar_defaults_to_current_month(store, svc):
    store.mark(2, date(2024, 2, 29), AttendanceStatus.LEAVE)

    start, days = svc.calendar(student_email="m1@school.test", month=None, today=date(2024, 2, 10))

    assert start == date(2024, 2, 1)
    assert [d.day for d in days] == [date(2024, 2, 29)]


def test_calendar_for_non_student_is_not_found(svc):
    with pytest.raises(NotFoundError, match="Student profile not found"):
        svc.calendar(student_email="math@school.test", month=None, today=date(2024, 5, 1))
