from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import MonthlyCountsRow, StatusCounts, StudentTotalsRow, TodayCounts


class ReportRepository(Protocol):
    """Read-only aggregate queries over the attendance ledger."""

    def day_counts(self, *, subject: str, day: date) -> TodayCounts:
        raise NotImplementedError

    def student_totals(self, *, subject: str, month_start: date, month_end: date) -> Sequence[StudentTotalsRow]:
        raise NotImplementedError

    def monthly_counts(self, *, subject: str, month_start: date, month_end: date) -> Sequence[MonthlyCountsRow]:
        """One row per student of the subject, ordered by roll number."""

        raise NotImplementedError

    def counts_for_student(
        self,
        *,
        student_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> StatusCounts:
        raise NotImplementedError
