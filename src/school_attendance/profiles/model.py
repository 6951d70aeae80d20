from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TeacherProfile:
    id: int
    name: str
    email: str
    subject: str


@dataclass(frozen=True)
class StudentProfile:
    id: int
    name: str
    email: str
    subject: str
    roll_num: int
