from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TodayCounts:
    """One subject's attendance for a single day (left join, so unmarked students count)."""

    total_student: int
    marked: int
    present: int
    absent: int
    late: int
    on_leave: int

    @property
    def not_marked(self) -> int:
        return max(self.total_student - self.marked, 0)


@dataclass(frozen=True)
class StatusCounts:
    total: int = 0
    present: int = 0
    absent: int = 0
    late: int = 0
    leave: int = 0


@dataclass(frozen=True)
class StudentTotalsRow:
    """Read-model: all-time and one-month totals for a student."""

    id: int
    name: str
    email: str
    roll_num: int
    total_classes: int
    present_count: int
    month_total_classes: int
    month_present_count: int


@dataclass(frozen=True)
class MonthlyCountsRow:
    """Read-model: per-status counts for a student within one month."""

    id: int
    name: str
    email: str
    roll_num: int
    counts: StatusCounts
