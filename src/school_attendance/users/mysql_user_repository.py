from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Account
from .repository import AccountRepository


class MySQLAccountRepository(AccountRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_email(self, email: str) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT email, name, password_hash, role
                FROM users
                WHERE email=%s
                """,
                (email,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Account(
                email=row["email"],
                name=row["name"],
                password_hash=row["password_hash"],
                role=Role(row["role"]),
            )

    def create_teacher(self, *, name: str, email: str, password_hash: str, subject: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO users(name, email, password_hash, role) VALUES(%s,%s,%s,%s)",
                (name, email, password_hash, Role.TEACHER.value),
            )
            cur.execute(
                "INSERT INTO teacher(name, email, subject) VALUES(%s,%s,%s)",
                (name, email, subject),
            )
