from __future__ import annotations

from datetime import date, timedelta

import pytest

from fakes import InMemoryProfiles, InMemoryReports, InMemoryStore
from school_attendance.core.enums import AttendanceStatus
from school_attendance.core.exceptions import NotFoundError
from school_attendance.reports.model import StudentTotalsRow
from school_attendance.reports.service import ReportService

TODAY = date(2024, 5, 15)
P, A, L, V = AttendanceStatus.PRESENT, AttendanceStatus.ABSENT, AttendanceStatus.LATE, AttendanceStatus.LEAVE


@pytest.fixture
def store():
    store = InMemoryStore()
    store.add_teacher("math@school.test", "Math")
    store.add_teacher("bio@school.test", "Biology")
    return store


def _svc(store):
    return ReportService(InMemoryReports(store), InMemoryProfiles(store))


def _history(store, student_id, statuses, *, start=date(2024, 4, 1)):
    for offset, status in enumerate(statuses):
        store.mark(student_id, start + timedelta(days=offset), status)


def test_today_counts_add_up(store):
    ids = [store.add_student(f"s{i}@school.test", "Math", i, password_hash="x").id for i in range(1, 11)]
    other = store.add_student("b@school.test", "Biology", 99, password_hash="x").id
    for sid, status in zip(ids, [P, P, P, A, L, V]):
        store.mark(sid, TODAY, status)
    store.mark(ids[7], TODAY - timedelta(days=1), P)
    store.mark(other, TODAY, A)

    stats = _svc(store).today_stats(teacher_email="math@school.test", today=TODAY)

    assert stats == {
        "subject": "Math",
        "total_student": 10,
        "today": {"present": 3, "absent": 1, "late": 1, "on_leave": 1, "not_marked": 4},
    }
    today = stats["today"]
    assert today["present"] + today["absent"] + today["late"] + today["on_leave"] + today["not_marked"] == 10


def test_today_stats_for_empty_subject(store):
    stats = _svc(store).today_stats(teacher_email="bio@school.test", today=TODAY)

    assert stats["total_student"] == 0
    assert stats["today"]["not_marked"] == 0


def test_below_threshold_includes_never_marked_students_first(store):
    fresh = store.add_student("new@school.test", "Math", 7, password_hash="x").id
    weak = store.add_student("weak@school.test", "Math", 2, password_hash="x").id
    exact = store.add_student("exact@school.test", "Math", 3, password_hash="x").id
    good = store.add_student("good@school.test", "Math", 4, password_hash="x").id
    weaker = store.add_student("weaker@school.test", "Math", 5, password_hash="x").id
    _history(store, weak, [P, A])
    _history(store, exact, [P, P, P, A])
    _history(store, good, [P, P, P, P, A])
    _history(store, weaker, [P, A, A, L])

    report = _svc(store).below_threshold(teacher_email="math@school.test", today=TODAY)

    assert report["subject"] == "Math"
    assert [s["id"] for s in report["students"]] == [fresh, weaker, weak]
    assert report["count"] == 3
    first = report["students"][0]
    assert first["total_classes"] == 0
    assert first["attendance_percentage"] == 0.0
    assert first["current_month"] == {"total_classes": 0, "present_count": 0, "attendance_percentage": 0.0}


def test_below_threshold_reports_current_month_separately(store):
    sid = store.add_student("s@school.test", "Math", 1, password_hash="x").id
    _history(store, sid, [A, A, A], start=date(2024, 4, 10))
    _history(store, sid, [P, A], start=date(2024, 5, 1))

    student = _svc(store).below_threshold(teacher_email="math@school.test", today=TODAY)["students"][0]

    assert (student["total_classes"], student["present_count"], student["attendance_percentage"]) == (5, 1, 20.0)
    assert student["current_month"] == {"total_classes": 2, "present_count": 1, "attendance_percentage": 50.0}


def test_monthly_details_counts_each_status_within_the_month(store):
    a = store.add_student("a@school.test", "Math", 2, password_hash="x").id
    b = store.add_student("b@school.test", "Math", 1, password_hash="x").id
    _history(store, a, [P, A, L, V, P, P], start=date(2024, 3, 30))
    store.add_student("x@school.test", "Biology", 3, password_hash="x")

    report = _svc(store).monthly_details(teacher_email="math@school.test", month=date(2024, 4, 1))

    assert report["month"] == "2024-04"
    assert report["count"] == 2
    assert [s["id"] for s in report["students"]] == [b, a]
    assert report["students"][0]["total_classes"] == 0
    assert report["students"][0]["attendance_percentage"] == 0.0
    a_row = report["students"][1]
    assert {k: a_row[k] for k in ("total_classes", "present_count", "absent_count", "late_count", "leave_count")} == {
        "total_classes": 4,
        "present_count": 2,
        "absent_count": 0,
        "late_count": 1,
        "leave_count": 1,
    }
    assert a_row["attendance_percentage"] == 50.0


def test_student_summary_overall_and_monthly(store):
    sid = store.add_student("s@school.test", "Math", 1, password_hash="x").id
    _history(store, sid, [P, P, A], start=date(2024, 4, 29))

    svc = _svc(store)

    assert svc.student_summary(student_id=sid) == {
        "total_classes": 3,
        "present_count": 2,
        "absent_count": 1,
        "attendance_percentage": 66.67,
        "absent_percentage": 33.33,
    }
    assert svc.student_summary(student_id=sid, month=date(2024, 5, 20))["total_classes"] == 1


def test_reports_require_teacher_profile(store):
    with pytest.raises(NotFoundError):
        _svc(store).today_stats(teacher_email="nobody@school.test", today=TODAY)


class FixedTotals:
    def __init__(self, rows):
        self._rows = rows

    def student_totals(self, *, subject, month_start, month_end):
        return self._rows


def test_threshold_is_checked_before_rounding(store):
    just_under = StudentTotalsRow(1, "A", "a@s.t", 1, 20000, 14999, 0, 0)
    exactly = StudentTotalsRow(2, "B", "b@s.t", 2, 20000, 15000, 0, 0)
    svc = ReportService(FixedTotals([just_under, exactly]), InMemoryProfiles(store))

    report = svc.below_threshold(teacher_email="math@school.test", today=TODAY)

    assert [s["id"] for s in report["students"]] == [1]
    assert report["students"][0]["attendance_percentage"] == 75.0
