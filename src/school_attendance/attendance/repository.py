from __future__ import annotations

from datetime import date
from typing import ContextManager, Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import CalendarDay, RosterRow


class LedgerTransaction(Protocol):
    """Operations available while a marking transaction is open."""

    def teacher_subject(self, email: str) -> Optional[str]:
        raise NotImplementedError

    def students_in_subject(self, student_ids: Sequence[int], subject: str) -> set[int]:
        """Subset of student_ids that exist and belong to subject (one query)."""

        raise NotImplementedError

    def upsert(self, *, student_id: int, day: date, status: AttendanceStatus) -> None:
        raise NotImplementedError


class AttendanceRepository(Protocol):
    def transaction(self) -> ContextManager[LedgerTransaction]:
        """Commit when the block exits normally, roll back on any exception."""

        raise NotImplementedError

    def roster_for_date(self, *, subject: str, day: date) -> Sequence[RosterRow]:
        raise NotImplementedError

    def records_for_student(self, *, student_id: int, start: date, end: date) -> Sequence[CalendarDay]:
        raise NotImplementedError
