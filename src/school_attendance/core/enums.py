from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account role used for authorization."""

    TEACHER = "TEACHER"
    STUDENT = "STUDENT"


class AttendanceStatus(str, Enum):
    """Canonical attendance status as stored in the database."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LATE = "LATE"
    LEAVE = "LEAVE"

    @classmethod
    def parse(cls, value) -> "AttendanceStatus | None":
        """Case-insensitive lookup; returns None for anything unrecognized."""
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None
