from __future__ import annotations

import mysql.connector
import pytest

from fakes import FakeConnection, FakeConnFactory, FakeCursor
from school_attendance.core.exceptions import ConflictError, TransactionFailure
from school_attendance.profiles.mysql_profile_repository import (
    DUPLICATE_ROLL_NUM,
    DUPLICATE_STUDENT_EMAIL,
    MySQLProfileRepository,
)

STUDENT = {"name": "Kid", "email": "kid@school.test", "password_hash": "h", "subject": "Math", "roll_num": 7}


def _duplicate(key: str):
    return mysql.connector.errors.IntegrityError(msg=f"Duplicate entry 'x' for key '{key}'", errno=1062)


def test_create_student_writes_account_then_profile_in_one_commit():
    cur = FakeCursor(lastrowid=42)
    conn = FakeConnection(cur)
    repo = MySQLProfileRepository(FakeConnFactory(conn))

    student_id = repo.create_student(**STUDENT)

    assert student_id == 42
    assert [sql.split("(")[0] for sql, _ in cur.executed] == ["INSERT INTO users", "INSERT INTO student"]
    assert cur.executed[0][1] == ("Kid", "kid@school.test", "h", "STUDENT")
    assert cur.executed[1][1] == ("Kid", "kid@school.test", "Math", 7)
    assert conn.commits == 1


def test_duplicate_roll_number_is_reported_as_such():
    cur = FakeCursor(fail_on="INSERT INTO student", error=_duplicate("student.roll_num"))
    conn = FakeConnection(cur)
    repo = MySQLProfileRepository(FakeConnFactory(conn))

    with pytest.raises(ConflictError) as exc:
        repo.create_student(**STUDENT)

    assert str(exc.value) == DUPLICATE_ROLL_NUM
    assert conn.rolled_back and not conn.committed


@pytest.mark.parametrize("failing_insert,key", [("INSERT INTO users", "users.PRIMARY"), ("INSERT INTO student", "student.email")])
def test_duplicate_email_is_reported_as_such(failing_insert, key):
    cur = FakeCursor(fail_on=failing_insert, error=_duplicate(key))
    repo = MySQLProfileRepository(FakeConnFactory(FakeConnection(cur)))

    with pytest.raises(ConflictError) as exc:
        repo.create_student(**STUDENT)

    assert str(exc.value) == DUPLICATE_STUDENT_EMAIL


def test_cascade_delete_runs_three_deletes_in_one_transaction():
    cur = FakeCursor()
    conn = FakeConnection(cur)
    factory = FakeConnFactory(conn)
    repo = MySQLProfileRepository(factory)

    repo.delete_student_cascade(student_id=3, email="kid@school.test")

    assert cur.executed == [
        ("DELETE FROM attendance WHERE student_id=%s", (3,)),
        ("DELETE FROM student WHERE id=%s", (3,)),
        ("DELETE FROM users WHERE email=%s", ("kid@school.test",)),
    ]
    assert factory.connects == 1
    assert conn.commits == 1


def test_cascade_delete_failure_commits_nothing():
    cur = FakeCursor(fail_on="DELETE FROM users")
    conn = FakeConnection(cur)
    repo = MySQLProfileRepository(FakeConnFactory(conn))

    with pytest.raises(TransactionFailure):
        repo.delete_student_cascade(student_id=3, email="kid@school.test")

    assert conn.commits == 0
    assert conn.rolled_back


def test_scope_lookup_is_case_insensitive_in_sql():
    cur = FakeCursor([{"id": 3, "name": "Kid", "email": "kid@school.test", "subject": "Math", "roll_num": 7}])
    repo = MySQLProfileRepository(FakeConnFactory(FakeConnection(cur)))

    student = repo.find_student_in_subject(3, "MATH")

    assert student.roll_num == 7
    sql, params = cur.executed[0]
    assert "LOWER(subject)=LOWER(%s)" in sql
    assert params == (3, "MATH")
