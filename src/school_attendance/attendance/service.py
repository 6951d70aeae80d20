from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import month_bounds
from ..core.constants import MAX_RECORDS_PER_MARK
from ..core.exceptions import NotFoundError, ValidationError
from ..profiles.repository import ProfileRepository
from ..profiles.scope import TEACHER_NOT_FOUND, require_student, require_teacher
from .model import CalendarDay, MarkEntry, MarkSummary, RosterRow, SkippedRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

INVALID_RECORD = "Missing ID or invalid status"
# Deliberately the same text whether the id is unknown or belongs to another subject.
OUT_OF_SCOPE = "Student ID not found or not in your subject"


class AttendanceService:
    """The attendance ledger: bulk marking plus the scoped roster/calendar reads."""

    def __init__(self, attendance: AttendanceRepository, profiles: ProfileRepository):
        self._attendance = attendance
        self._profiles = profiles

    def mark_attendance(self, *, teacher_email: str, day: date, entries: Sequence[MarkEntry]) -> MarkSummary:
        """Upsert every valid, in-scope entry for `day` in one transaction.

        Invalid or out-of-scope entries are skipped and reported; a missing
        teacher profile or a database failure aborts with nothing written.
        Later duplicates of the same student overwrite earlier ones.
        """
        if len(entries) > MAX_RECORDS_PER_MARK:
            raise ValidationError(f"Too many records in one request (limit {MAX_RECORDS_PER_MARK})")

        skipped: list[SkippedRecord] = []
        pending: list[MarkEntry] = []
        for entry in entries:
            if entry.is_valid:
                pending.append(entry)
            else:
                skipped.append(SkippedRecord(index=entry.index, reason=INVALID_RECORD, record=entry.raw))
                logger.warning("Skipping invalid record #%s: %r", entry.index, entry.raw)

        marked = 0
        with self._attendance.transaction() as tx:
            subject = tx.teacher_subject(teacher_email)
            if subject is None:
                raise NotFoundError(TEACHER_NOT_FOUND)

            in_scope = tx.students_in_subject([e.student_id for e in pending], subject) if pending else set()

            for entry in pending:
                if entry.student_id not in in_scope:
                    skipped.append(SkippedRecord(index=entry.index, reason=OUT_OF_SCOPE))
                    logger.warning("Skipping record #%s: student not found or out of scope", entry.index)
                    continue
                tx.upsert(student_id=entry.student_id, day=day, status=entry.status)
                marked += 1

        skipped.sort(key=lambda s: s.index)
        logger.info(
            "Attendance %s by %s: total=%s marked=%s skipped=%s",
            day.isoformat(),
            teacher_email,
            len(entries),
            marked,
            len(skipped),
        )
        return MarkSummary(total=len(entries), marked=marked, skipped_details=skipped)

    def daily_attendance(self, *, teacher_email: str, day: date) -> Sequence[RosterRow]:
        subject = require_teacher(self._profiles, teacher_email).subject
        return self._attendance.roster_for_date(subject=subject, day=day)

    def calendar(self, *, student_email: str, month: Optional[date], today: date) -> tuple[date, Sequence[CalendarDay]]:
        """The caller's own marks for one month (default: the month of `today`)."""
        student = require_student(self._profiles, student_email)
        start, end = month_bounds(month or today)
        return start, self._attendance.records_for_student(student_id=student.id, start=start, end=end)
