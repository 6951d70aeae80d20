from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import MonthlyCountsRow, StatusCounts, StudentTotalsRow, TodayCounts
from .repository import ReportRepository


def _int(value) -> int:
    # SUM() comes back as Decimal (or None on empty input)
    return int(value or 0)


class MySQLReportRepository(ReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def day_counts(self, *, subject: str, day: date) -> TodayCounts:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    COUNT(DISTINCT s.id)                AS total_student,
                    COUNT(a.id)                         AS marked,
                    SUM(a.status = 'PRESENT')           AS present,
                    SUM(a.status = 'ABSENT')            AS absent,
                    SUM(a.status = 'LATE')              AS late,
                    SUM(a.status = 'LEAVE')             AS on_leave
                FROM student s
                LEFT JOIN attendance a ON a.student_id = s.id AND a.date = %s
                WHERE LOWER(s.subject) = LOWER(%s)
                """,
                (day, subject),
            )
            r = fetchone(cur) or {}
            return TodayCounts(
                total_student=_int(r.get("total_student")),
                marked=_int(r.get("marked")),
                present=_int(r.get("present")),
                absent=_int(r.get("absent")),
                late=_int(r.get("late")),
                on_leave=_int(r.get("on_leave")),
            )

    def student_totals(self, *, subject: str, month_start: date, month_end: date) -> Sequence[StudentTotalsRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    s.id, s.name, s.email, s.roll_num,
                    COUNT(a.id)                                                   AS total_classes,
                    SUM(a.status = 'PRESENT')                                     AS present_count,
                    SUM(a.date BETWEEN %s AND %s)                                 AS month_total_classes,
                    SUM(a.status = 'PRESENT' AND a.date BETWEEN %s AND %s)        AS month_present_count
                FROM student s
                LEFT JOIN attendance a ON a.student_id = s.id
                WHERE LOWER(s.subject) = LOWER(%s)
                GROUP BY s.id, s.name, s.email, s.roll_num
                ORDER BY s.roll_num ASC
                """,
                (month_start, month_end, month_start, month_end, subject),
            )
            return [
                StudentTotalsRow(
                    id=int(r["id"]),
                    name=r["name"],
                    email=r["email"],
                    roll_num=int(r["roll_num"]),
                    total_classes=_int(r.get("total_classes")),
                    present_count=_int(r.get("present_count")),
                    month_total_classes=_int(r.get("month_total_classes")),
                    month_present_count=_int(r.get("month_present_count")),
                )
                for r in fetchall(cur)
            ]

    def monthly_counts(self, *, subject: str, month_start: date, month_end: date) -> Sequence[MonthlyCountsRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    s.id, s.name, s.email, s.roll_num,
                    COUNT(a.id)                 AS total,
                    SUM(a.status = 'PRESENT')   AS present,
                    SUM(a.status = 'ABSENT')    AS absent,
                    SUM(a.status = 'LATE')      AS late,
                    SUM(a.status = 'LEAVE')     AS on_leave
                FROM student s
                LEFT JOIN attendance a
                    ON a.student_id = s.id AND a.date BETWEEN %s AND %s
                WHERE LOWER(s.subject) = LOWER(%s)
                GROUP BY s.id, s.name, s.email, s.roll_num
                ORDER BY s.roll_num ASC
                """,
                (month_start, month_end, subject),
            )
            return [
                MonthlyCountsRow(
                    id=int(r["id"]),
                    name=r["name"],
                    email=r["email"],
                    roll_num=int(r["roll_num"]),
                    counts=StatusCounts(
                        total=_int(r.get("total")),
                        present=_int(r.get("present")),
                        absent=_int(r.get("absent")),
                        late=_int(r.get("late")),
                        leave=_int(r.get("on_leave")),
                    ),
                )
                for r in fetchall(cur)
            ]

    def counts_for_student(
        self,
        *,
        student_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> StatusCounts:
        clauses = ["student_id=%s"]
        params: list[object] = [int(student_id)]
        if start is not None and end is not None:
            clauses.append("date BETWEEN %s AND %s")
            params.extend([start, end])
        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    COUNT(*)                  AS total,
                    SUM(status = 'PRESENT')   AS present,
                    SUM(status = 'ABSENT')    AS absent,
                    SUM(status = 'LATE')      AS late,
                    SUM(status = 'LEAVE')     AS on_leave
                FROM attendance
                WHERE {where}
                """,
                tuple(params),
            )
            r = fetchone(cur) or {}
            return StatusCounts(
                total=_int(r.get("total")),
                present=_int(r.get("present")),
                absent=_int(r.get("absent")),
                late=_int(r.get("late")),
                leave=_int(r.get("on_leave")),
            )
