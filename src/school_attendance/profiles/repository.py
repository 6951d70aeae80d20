from __future__ import annotations

from typing import Optional, Protocol

from .model import StudentProfile, TeacherProfile


class ProfileRepository(Protocol):
    """Teacher/student profile rows.

    Subject comparisons are case-insensitive everywhere.
    """

    def get_teacher_by_email(self, email: str) -> Optional[TeacherProfile]:
        raise NotImplementedError

    def get_student_by_email(self, email: str) -> Optional[StudentProfile]:
        raise NotImplementedError

    def create_student(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        subject: str,
        roll_num: int,
    ) -> int:
        """Insert the users row and the student profile in one transaction."""

        raise NotImplementedError

    def find_student_in_subject(self, student_id: int, subject: str) -> Optional[StudentProfile]:
        raise NotImplementedError

    def delete_student_cascade(self, *, student_id: int, email: str) -> None:
        """Remove attendance rows, the profile and the account atomically."""

        raise NotImplementedError
