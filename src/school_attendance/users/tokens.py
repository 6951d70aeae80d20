from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt

from ..core.constants import DEFAULT_TOKEN_TTL_HOURS
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from .model import Identity

ALGORITHM = "HS256"


class SessionIssuer:
    """Signs and verifies the session token kept in the auth cookie."""

    def __init__(
        self,
        secret_key: str,
        *,
        ttl_hours: int = DEFAULT_TOKEN_TTL_HOURS,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._secret_key = secret_key
        self._ttl = timedelta(hours=int(ttl_hours))
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @property
    def ttl_seconds(self) -> int:
        return int(self._ttl.total_seconds())

    def issue(self, email: str, role: Role) -> str:
        now = self._clock()
        payload = {"email": email, "role": role.value, "iat": now, "exp": now + self._ttl}
        return jwt.encode(payload, self._secret_key, algorithm=ALGORITHM)

    def verify(self, token: str) -> Identity:
        try:
            data = jwt.decode(token, self._secret_key, algorithms=[ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token has expired")
        except jwt.InvalidTokenError:
            raise AuthenticationError("invalid token")

        email = data.get("email")
        try:
            role = Role(data.get("role"))
        except ValueError:
            raise AuthenticationError("invalid token")
        if not email:
            raise AuthenticationError("invalid token")
        return Identity(email=email, role=role)
