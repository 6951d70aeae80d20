from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.datetime_utils import format_month, month_bounds
from ..core.constants import LOW_ATTENDANCE_THRESHOLD
from ..profiles.repository import ProfileRepository
from ..profiles.scope import require_teacher
from .calculator import attendance_percentage
from .model import StatusCounts, StudentTotalsRow
from .repository import ReportRepository


def _student_fields(row) -> dict:
    return {"id": row.id, "name": row.name, "email": row.email, "roll_num": row.roll_num}


class ReportService:
    """Read-side aggregation, always scoped to the calling teacher's subject."""

    def __init__(
        self,
        reports: ReportRepository,
        profiles: ProfileRepository,
        *,
        threshold: float = LOW_ATTENDANCE_THRESHOLD,
    ):
        self._reports = reports
        self._profiles = profiles
        self._threshold = threshold

    def today_stats(self, *, teacher_email: str, today: date) -> dict:
        subject = require_teacher(self._profiles, teacher_email).subject
        counts = self._reports.day_counts(subject=subject, day=today)
        return {
            "subject": subject,
            "total_student": counts.total_student,
            "today": {
                "present": counts.present,
                "absent": counts.absent,
                "late": counts.late,
                "on_leave": counts.on_leave,
                "not_marked": counts.not_marked,
            },
        }

    def below_threshold(self, *, teacher_email: str, today: date) -> dict:
        """Students whose all-time percentage is under the threshold.

        Students never marked count as 0% and are listed first.
        """
        subject = require_teacher(self._profiles, teacher_email).subject
        month_start, month_end = month_bounds(today)
        rows = self._reports.student_totals(subject=subject, month_start=month_start, month_end=month_end)

        flagged: list[tuple[StudentTotalsRow, float]] = []
        for r in rows:
            # unrounded: 74.995% is still below 75
            if r.total_classes == 0 or r.present_count * 100 < self._threshold * r.total_classes:
                flagged.append((r, attendance_percentage(r.present_count, r.total_classes)))

        flagged.sort(key=lambda item: (item[0].total_classes > 0, item[1], item[0].roll_num))

        students = []
        for r, pct in flagged:
            students.append(
                {
                    **_student_fields(r),
                    "total_classes": r.total_classes,
                    "present_count": r.present_count,
                    "attendance_percentage": pct,
                    "current_month": {
                        "total_classes": r.month_total_classes,
                        "present_count": r.month_present_count,
                        "attendance_percentage": attendance_percentage(r.month_present_count, r.month_total_classes),
                    },
                }
            )
        return {"subject": subject, "count": len(students), "students": students}

    def monthly_details(self, *, teacher_email: str, month: date) -> dict:
        subject = require_teacher(self._profiles, teacher_email).subject
        month_start, month_end = month_bounds(month)
        rows = self._reports.monthly_counts(subject=subject, month_start=month_start, month_end=month_end)

        students = [
            {
                **_student_fields(r),
                "total_classes": r.counts.total,
                "present_count": r.counts.present,
                "absent_count": r.counts.absent,
                "late_count": r.counts.late,
                "leave_count": r.counts.leave,
                "attendance_percentage": attendance_percentage(r.counts.present, r.counts.total),
            }
            for r in rows
        ]
        return {"subject": subject, "month": format_month(month_start), "count": len(students), "students": students}

    def student_summary(self, *, student_id: int, month: Optional[date] = None) -> dict:
        """All-time summary, or a single month's when `month` is given."""
        if month is None:
            counts = self._reports.counts_for_student(student_id=student_id)
        else:
            start, end = month_bounds(month)
            counts = self._reports.counts_for_student(student_id=student_id, start=start, end=end)
        return _summary(counts)


def _summary(counts: StatusCounts) -> dict:
    return {
        "total_classes": counts.total,
        "present_count": counts.present,
        "absent_count": counts.absent,
        "attendance_percentage": attendance_percentage(counts.present, counts.total),
        "absent_percentage": attendance_percentage(counts.absent, counts.total),
    }
