"""Caller scoping shared by every teacher- and student-facing operation.

Teachers are scoped by the subject on their own profile; students by the
profile behind their own account email. Client-supplied subjects or student
ids are never trusted.
"""

from __future__ import annotations

from ..core.exceptions import NotFoundError
from .model import StudentProfile, TeacherProfile
from .repository import ProfileRepository

TEACHER_NOT_FOUND = "Teacher profile not found"
STUDENT_NOT_FOUND = "Student profile not found"


def require_teacher(profiles: ProfileRepository, email: str) -> TeacherProfile:
    teacher = profiles.get_teacher_by_email(email)
    if not teacher:
        raise NotFoundError(TEACHER_NOT_FOUND)
    return teacher


def require_student(profiles: ProfileRepository, email: str) -> StudentProfile:
    student = profiles.get_student_by_email(email)
    if not student:
        raise NotFoundError(STUDENT_NOT_FOUND)
    return student


def same_subject(a: str, b: str) -> bool:
    return (a or "").lower() == (b or "").lower()
