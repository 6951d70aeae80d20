from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import StudentProfile, TeacherProfile
from .repository import ProfileRepository

DUPLICATE_STUDENT_EMAIL = "Student with this email already exists"
DUPLICATE_ROLL_NUM = "Student with this roll number already exists"


def _student(row: dict) -> StudentProfile:
    return StudentProfile(
        id=int(row["id"]),
        name=row["name"],
        email=row["email"],
        subject=row["subject"],
        roll_num=int(row["roll_num"]),
    )


class MySQLProfileRepository(ProfileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_teacher_by_email(self, email: str) -> Optional[TeacherProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, email, subject FROM teacher WHERE email=%s", (email,))
            row = fetchone(cur)
            if not row:
                return None
            return TeacherProfile(id=int(row["id"]), name=row["name"], email=row["email"], subject=row["subject"])

    def get_student_by_email(self, email: str) -> Optional[StudentProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, email, subject, roll_num FROM student WHERE email=%s", (email,))
            row = fetchone(cur)
            return _student(row) if row else None

    def create_student(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        subject: str,
        roll_num: int,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO users(name, email, password_hash, role) VALUES(%s,%s,%s,%s)",
                    (name, email, password_hash, Role.STUDENT.value),
                )
                cur.execute(
                    "INSERT INTO student(name, email, subject, roll_num) VALUES(%s,%s,%s,%s)",
                    (name, email, subject, int(roll_num)),
                )
                return int(cur.lastrowid)
        except ConflictError as e:
            # MySQL names the violated key in the message, e.g. "... for key 'student.roll_num'"
            if "roll_num" in str(e):
                raise ConflictError(DUPLICATE_ROLL_NUM) from e
            raise ConflictError(DUPLICATE_STUDENT_EMAIL) from e

    def find_student_in_subject(self, student_id: int, subject: str) -> Optional[StudentProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, email, subject, roll_num
                FROM student
                WHERE id=%s AND LOWER(subject)=LOWER(%s)
                """,
                (int(student_id), subject),
            )
            row = fetchone(cur)
            return _student(row) if row else None

    def delete_student_cascade(self, *, student_id: int, email: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance WHERE student_id=%s", (int(student_id),))
            cur.execute("DELETE FROM student WHERE id=%s", (int(student_id),))
            cur.execute("DELETE FROM users WHERE email=%s", (email,))
