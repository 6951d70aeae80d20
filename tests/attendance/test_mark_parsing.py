from __future__ import annotations

from datetime import date

import pytest

from school_attendance.attendance.parsing import normalize_record, parse_mark_request
from school_attendance.core.enums import AttendanceStatus
from school_attendance.core.exceptions import ValidationError


def test_status_is_case_insensitive_and_trimmed():
    entry = normalize_record(0, {"student_id": 3, "status": "  present "})

    assert entry.status is AttendanceStatus.PRESENT
    assert entry.student_id == 3
    assert entry.is_valid


def test_id_field_is_accepted_as_synonym():
    entry = normalize_record(4, {"id": "12", "status": "late"})

    assert entry.student_id == 12
    assert entry.index == 4


def test_student_id_takes_precedence_over_id():
    entry = normalize_record(0, {"student_id": 5, "id": 9, "status": "LEAVE"})

    assert entry.student_id == 5


@pytest.mark.parametrize(
    "raw",
    [
        {"status": "PRESENT"},
        {"student_id": 1, "status": "HOLIDAY"},
        {"student_id": 1},
        {"student_id": True, "status": "PRESENT"},
        {"student_id": -2, "status": "PRESENT"},
        {"student_id": "abc", "status": "PRESENT"},
        {"student_id": 1, "status": 1},
    ],
)
def test_bad_records_normalize_to_invalid_entries(raw):
    entry = normalize_record(0, raw)

    assert not entry.is_valid
    assert entry.raw == raw


def test_parse_request_keeps_record_order():
    mark = parse_mark_request(
        {
            "date": "2024-05-02",
            "records": [{"student_id": 2, "status": "absent"}, {"student_id": 1, "status": "PRESENT"}],
        }
    )

    assert mark.day == date(2024, 5, 2)
    assert [e.student_id for e in mark.entries] == [2, 1]
    assert [e.index for e in mark.entries] == [0, 1]


def test_empty_records_are_allowed():
    mark = parse_mark_request({"date": "2024-05-02", "records": []})

    assert mark.entries == []


@pytest.mark.parametrize(
    "payload",
    [
        None,
        [],
        {"records": []},
        {"date": "2024-05-02"},
        {"date": "2024-05-02", "records": {"student_id": 1}},
    ],
)
def test_malformed_body_is_rejected(payload):
    with pytest.raises(ValidationError, match="Invalid request body"):
        parse_mark_request(payload)


@pytest.mark.parametrize("raw_date", ["2024-02-30", "02-05-2024", "2024-5-2", "yesterday"])
def test_invalid_dates_are_rejected(raw_date):
    with pytest.raises(ValidationError, match="Invalid date"):
        parse_mark_request({"date": raw_date, "records": []})


def test_leap_day_is_accepted():
    assert parse_mark_request({"date": "2024-02-29", "records": []}).day == date(2024, 2, 29)


def test_batch_limit_is_enforced_before_anything_else():
    records = [{"student_id": i + 1, "status": "PRESENT"} for i in range(201)]

    with pytest.raises(ValidationError, match="limit 200"):
        parse_mark_request({"date": "2024-05-02", "records": records})

    assert len(parse_mark_request({"date": "2024-05-02", "records": records[:200]}).entries) == 200


def test_non_object_record_rejects_the_request():
    with pytest.raises(ValidationError):
        parse_mark_request({"date": "2024-05-02", "records": [{"student_id": 1, "status": "PRESENT"}, "oops"]})


@pytest.mark.parametrize("student_id", [0, "", None, "abc", -1])
def test_unusable_student_id_falls_back_to_id(student_id):
    entry = normalize_record(0, {"student_id": student_id, "id": 5, "status": "PRESENT"})

    assert entry.student_id == 5
    assert entry.is_valid


def test_integral_float_id_is_accepted():
    assert normalize_record(0, {"student_id": 5.0, "status": "PRESENT"}).student_id == 5
    assert normalize_record(0, {"id": 5.5, "status": "PRESENT"}).student_id is None
