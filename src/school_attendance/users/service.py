from __future__ import annotations

import logging

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_email, require_max_length, require_min_length, require_non_empty
from ..core.constants import MAX_NAME_LENGTH, MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ConflictError, NotFoundError
from .model import Account, Identity
from .repository import AccountRepository
from .tokens import SessionIssuer

logger = logging.getLogger(__name__)

WRONG_CREDENTIALS = "Wrong email or password"
DUPLICATE_EMAIL = "User with this email already exists"


class AuthService:
    """Use cases: register teacher, login, resolve session."""

    def __init__(self, accounts: AccountRepository, tokens: SessionIssuer):
        self._accounts = accounts
        self._tokens = tokens

    @property
    def token_ttl_seconds(self) -> int:
        return self._tokens.ttl_seconds

    def register_teacher(self, *, name, email, password, subject) -> str:
        """Create a TEACHER account plus profile and return a session token."""
        name = require_max_length(require_non_empty(name, "Name"), "Name", MAX_NAME_LENGTH)
        email = require_email(email)
        password = require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        subject = require_max_length(require_non_empty(subject, "Subject"), "Subject", MAX_NAME_LENGTH)

        if self._accounts.get_by_email(email):
            raise ConflictError(DUPLICATE_EMAIL)

        try:
            self._accounts.create_teacher(
                name=name,
                email=email,
                password_hash=generate_password_hash(password),
                subject=subject,
            )
        except ConflictError:
            # lost a race with a concurrent registration for the same email
            raise ConflictError(DUPLICATE_EMAIL)

        logger.info("Registered teacher %s (subject=%s)", email, subject)
        return self._tokens.issue(email, Role.TEACHER)

    def authenticate(self, email, password) -> tuple[Account, str]:
        email = require_email(email)
        require_non_empty(password, "Password")

        account = self._accounts.get_by_email(email)
        if not account:
            raise AuthenticationError(WRONG_CREDENTIALS)

        try:
            ok = check_password_hash(account.password_hash, password)
        except ValueError:
            # unknown hash method, e.g. a corrupted value
            ok = False

        if not ok:
            raise AuthenticationError(WRONG_CREDENTIALS)

        return account, self._tokens.issue(account.email, account.role)

    def get_account(self, email: str) -> Account:
        account = self._accounts.get_by_email(email)
        if not account:
            raise NotFoundError("User not found")
        return account

    def resolve_identity(self, token: str) -> Identity:
        """Verify the token and make sure the account was not deleted since it was issued."""
        identity = self._tokens.verify(token)
        if not self._accounts.get_by_email(identity.email):
            raise AuthenticationError("User account no longer exists")
        return identity
