from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class Account:
    """Login identity row from the users table.

    Note: Plain data object, no DB access here.
    """

    email: str
    name: str
    password_hash: str
    role: Role


@dataclass(frozen=True)
class Identity:
    """What a verified session token carries."""

    email: str
    role: Role
