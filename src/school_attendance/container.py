from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_TOKEN_TTL_HOURS
from .database.connection import DBConfig, DatabaseConnection
from .profiles.mysql_profile_repository import MySQLProfileRepository
from .profiles.repository import ProfileRepository
from .profiles.service import StudentService, TeacherService
from .reports.mysql_report_repository import MySQLReportRepository
from .reports.repository import ReportRepository
from .reports.service import ReportService
from .users.mysql_user_repository import MySQLAccountRepository
from .users.repository import AccountRepository
from .users.service import AuthService
from .users.tokens import SessionIssuer


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    accounts_repo: AccountRepository
    profiles_repo: ProfileRepository
    attendance_repo: AttendanceRepository
    reports_repo: ReportRepository

    auth_service: AuthService
    teacher_service: TeacherService
    student_service: StudentService
    attendance_service: AttendanceService
    report_service: ReportService


def wire(
    *,
    accounts_repo: AccountRepository,
    profiles_repo: ProfileRepository,
    attendance_repo: AttendanceRepository,
    reports_repo: ReportRepository,
    tokens: SessionIssuer,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build services on top of any repository implementations (MySQL or in-memory)."""
    report_service = ReportService(reports_repo, profiles_repo)
    return Container(
        conn=conn,
        accounts_repo=accounts_repo,
        profiles_repo=profiles_repo,
        attendance_repo=attendance_repo,
        reports_repo=reports_repo,
        auth_service=AuthService(accounts_repo, tokens),
        teacher_service=TeacherService(profiles_repo),
        student_service=StudentService(profiles_repo, report_service),
        attendance_service=AttendanceService(attendance_repo, profiles_repo),
        report_service=report_service,
    )


def build_container(*, db_config: dict, secret_key: str, token_ttl_hours: int = DEFAULT_TOKEN_TTL_HOURS) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return wire(
        accounts_repo=MySQLAccountRepository(conn),
        profiles_repo=MySQLProfileRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        reports_repo=MySQLReportRepository(conn),
        tokens=SessionIssuer(secret_key, ttl_hours=token_ttl_hours),
        conn=conn,
    )
