from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import g, request

from ..core.constants import TOKEN_COOKIE_NAME
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError
from .model import Identity


def auth_required(container, *, role: Optional[Role] = None):
    """Require a valid session cookie (and optionally a role); stores the Identity on flask.g."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            token = request.cookies.get(TOKEN_COOKIE_NAME)
            if not token:
                raise AuthenticationError("No token, authorization denied")

            identity = container.auth_service.resolve_identity(token)
            if role is not None and identity.role != role:
                raise AuthorizationError("Access denied")

            g.identity = identity
            return view(*args, **kwargs)

        return wrapper

    return decorator


def current_identity() -> Identity:
    return g.identity
