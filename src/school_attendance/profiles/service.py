from __future__ import annotations

import logging
from datetime import date

from werkzeug.security import generate_password_hash

from ..common.validators import (
    require_email,
    require_max_length,
    require_min_length,
    require_non_empty,
    require_positive_int,
)
from ..core.constants import MAX_NAME_LENGTH, MIN_PASSWORD_LENGTH
from ..core.exceptions import ScopeViolation, ValidationError
from ..reports.service import ReportService
from .model import StudentProfile, TeacherProfile
from .repository import ProfileRepository
from .scope import require_student, require_teacher, same_subject

logger = logging.getLogger(__name__)

STUDENT_NOT_IN_SCOPE = "Student not found or not in your subject"


class TeacherService:
    """Use cases: teacher profile, enrol and remove students."""

    def __init__(self, profiles: ProfileRepository):
        self._profiles = profiles

    def get_profile(self, email: str) -> TeacherProfile:
        return require_teacher(self._profiles, email)

    def add_student(self, *, teacher_email: str, name, email, password, roll_num, subject=None) -> int:
        teacher = require_teacher(self._profiles, teacher_email)

        name = require_max_length(require_non_empty(name, "Name"), "Name", MAX_NAME_LENGTH)
        email = require_email(email)
        password = require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        roll_num = require_positive_int(roll_num, "Roll number")

        if subject is None or (isinstance(subject, str) and not subject.strip()):
            subject = teacher.subject
        else:
            subject = require_max_length(require_non_empty(subject, "Subject"), "Subject", MAX_NAME_LENGTH)
            if not same_subject(subject, teacher.subject):
                raise ValidationError("You can only enrol students in your own subject")

        student_id = self._profiles.create_student(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            subject=subject,
            roll_num=roll_num,
        )
        logger.info("Teacher %s enrolled student %s (roll %s)", teacher_email, student_id, roll_num)
        return student_id

    def delete_student(self, *, teacher_email: str, student_id: int) -> StudentProfile:
        teacher = require_teacher(self._profiles, teacher_email)

        student = self._profiles.find_student_in_subject(int(student_id), teacher.subject)
        if not student:
            raise ScopeViolation(STUDENT_NOT_IN_SCOPE)

        self._profiles.delete_student_cascade(student_id=student.id, email=student.email)
        logger.info("Teacher %s deleted student %s", teacher_email, student.id)
        return student


class StudentService:
    """Use cases: a student's own profile and attendance summary."""

    def __init__(self, profiles: ProfileRepository, reports: ReportService):
        self._profiles = profiles
        self._reports = reports

    def get_profile(self, email: str) -> StudentProfile:
        return require_student(self._profiles, email)

    def get_details(self, *, email: str, today: date) -> dict:
        student = require_student(self._profiles, email)
        overall = self._reports.student_summary(student_id=student.id)
        month = self._reports.student_summary(student_id=student.id, month=today)
        return {
            "profile": {
                "name": student.name,
                "id_code": student.id,
                "subject": student.subject,
                "roll_no": student.roll_num,
                "email": student.email,
            },
            "attendance": overall,
            "current_month": {
                "total_classes": month["total_classes"],
                "present_count": month["present_count"],
                "attendance_percentage": month["attendance_percentage"],
            },
        }
