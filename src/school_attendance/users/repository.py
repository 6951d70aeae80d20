from __future__ import annotations

from typing import Optional, Protocol

from .model import Account


class AccountRepository(Protocol):
    """Repository interface for accounts.

    Note: services depend on this interface, not on a concrete database.
    """

    def get_by_email(self, email: str) -> Optional[Account]:
        raise NotImplementedError

    def create_teacher(self, *, name: str, email: str, password_hash: str, subject: str) -> None:
        """Insert the users row and the teacher profile in one transaction."""

        raise NotImplementedError
