from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class MarkEntry:
    """One submitted record after normalization.

    student_id/status are None when the input could not be coerced.
    """

    index: int
    student_id: Optional[int]
    status: Optional[AttendanceStatus]
    raw: dict[str, Any]

    @property
    def is_valid(self) -> bool:
        return self.student_id is not None and self.status is not None


@dataclass(frozen=True)
class MarkRequest:
    day: date
    entries: list[MarkEntry]


@dataclass(frozen=True)
class SkippedRecord:
    index: int
    reason: str
    record: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict:
        out: dict[str, Any] = {"recordIndex": self.index, "reason": self.reason}
        if self.record is not None:
            out["record"] = self.record
        return out


@dataclass(frozen=True)
class MarkSummary:
    total: int
    marked: int
    skipped_details: list[SkippedRecord] = field(default_factory=list)

    @property
    def skipped(self) -> int:
        return len(self.skipped_details)


@dataclass(frozen=True)
class RosterRow:
    """A student of the subject with that day's status (None = not marked yet)."""

    id: int
    name: str
    email: str
    roll_num: int
    status: Optional[AttendanceStatus]


@dataclass(frozen=True)
class CalendarDay:
    day: date
    status: AttendanceStatus
