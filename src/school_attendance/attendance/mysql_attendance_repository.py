from __future__ import annotations

from contextlib import contextmanager
from datetime import date
from typing import Iterator, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, placeholders
from .model import CalendarDay, RosterRow
from .repository import AttendanceRepository, LedgerTransaction


class MySQLLedgerTransaction(LedgerTransaction):
    def __init__(self, cur):
        self._cur = cur

    def teacher_subject(self, email: str) -> Optional[str]:
        self._cur.execute("SELECT subject FROM teacher WHERE email=%s", (email,))
        row = fetchone(self._cur)
        return row["subject"] if row else None

    def students_in_subject(self, student_ids: Sequence[int], subject: str) -> set[int]:
        ids = sorted({int(i) for i in student_ids})
        if not ids:
            return set()
        self._cur.execute(
            f"""
            SELECT id
            FROM student
            WHERE id IN ({placeholders(len(ids))}) AND LOWER(subject)=LOWER(%s)
            """,
            (*ids, subject),
        )
        return {int(r["id"]) for r in fetchall(self._cur)}

    def upsert(self, *, student_id: int, day: date, status: AttendanceStatus) -> None:
        self._cur.execute(
            """
            INSERT INTO attendance(student_id, date, status)
            VALUES(%s,%s,%s)
            ON DUPLICATE KEY UPDATE status=VALUES(status)
            """,
            (int(student_id), day, status.value),
        )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @contextmanager
    def transaction(self) -> Iterator[MySQLLedgerTransaction]:
        with db_cursor(self._conn_factory) as (_, cur):
            yield MySQLLedgerTransaction(cur)

    def roster_for_date(self, *, subject: str, day: date) -> Sequence[RosterRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT s.id, s.name, s.email, s.roll_num, a.status
                FROM student s
                LEFT JOIN attendance a ON a.student_id = s.id AND a.date = %s
                WHERE LOWER(s.subject) = LOWER(%s)
                ORDER BY s.roll_num ASC
                """,
                (day, subject),
            )
            return [
                RosterRow(
                    id=int(r["id"]),
                    name=r["name"],
                    email=r["email"],
                    roll_num=int(r["roll_num"]),
                    status=AttendanceStatus(r["status"]) if r.get("status") else None,
                )
                for r in fetchall(cur)
            ]

    def records_for_student(self, *, student_id: int, start: date, end: date) -> Sequence[CalendarDay]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT date, status
                FROM attendance
                WHERE student_id=%s AND date BETWEEN %s AND %s
                ORDER BY date ASC
                """,
                (int(student_id), start, end),
            )
            return [CalendarDay(day=r["date"], status=AttendanceStatus(r["status"])) for r in fetchall(cur)]
