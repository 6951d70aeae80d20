class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials or a session token are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a profile or scoped entity does not exist."""


class ScopeViolation(NotFoundError):
    """Entity exists but belongs to another subject.

    Reported exactly like NotFoundError so callers cannot probe other tenants.
    """


class ConflictError(DomainError):
    """Raised on uniqueness violations (duplicate email, roll number)."""


class TransactionFailure(DomainError):
    """Raised when the database fails mid-operation; the work was rolled back."""
