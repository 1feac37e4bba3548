"""Custom exceptions for driver-auth.

All errors raised by the package derive from DriverAuthError, which carries a
human-readable message and an optional details dict. The HTTP layer maps
these to JSON error responses in main.py.

Service-level signals (what AuthService returns to its callers) are AuthError
subclasses tagged with an ErrorKind, so callers can either catch the class or
match on `error.kind`:

    try:
        service.login(email, password, app_id)
    except AuthError as e:
        match e.kind:
            case ErrorKind.INVALID_CREDENTIALS: ...
            case ErrorKind.INTERNAL: ...
"""

from enum import Enum


class DriverAuthError(Exception):
    """Base exception for all driver-auth errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Input and configuration
# ============================================================================


class ValidationError(DriverAuthError):
    """Request data failed validation before reaching the auth service."""


class ConfigurationError(DriverAuthError):
    """Invalid configuration detected at startup."""


# ============================================================================
# Storage
# ============================================================================


class DatabaseError(DriverAuthError):
    """Storage engine failure."""


class DuplicateUserError(DriverAuthError):
    """A user with this email is already registered."""


class UserNotFoundError(DriverAuthError):
    """No user is registered with this email."""


# ============================================================================
# Crypto
# ============================================================================


class HashingError(DriverAuthError):
    """Password hash could not be generated."""


class MalformedHashError(DriverAuthError):
    """Stored password hash is not a bcrypt hash."""


class TokenSigningError(DriverAuthError):
    """Token could not be signed."""


# ============================================================================
# Service signals
# ============================================================================


class ErrorKind(Enum):
    """Coarse failure categories returned by AuthService."""

    USER_EXISTS = "UserExists"
    INVALID_CREDENTIALS = "InvalidCredentials"
    INTERNAL = "InternalError"


class AuthError(DriverAuthError):
    """Failure signal returned by AuthService.

    The message is the coarse, user-safe signal. The underlying cause is kept
    on __cause__ and `op` names the service operation that failed.
    """

    kind: ErrorKind = ErrorKind.INTERNAL
    default_message = "internal error"

    def __init__(self, op: str, message: str | None = None):
        super().__init__(message or self.default_message, {"op": op})
        self.op = op

    def __str__(self) -> str:
        return f"{self.op}: {self.message}"


class UserExistsError(AuthError):
    kind = ErrorKind.USER_EXISTS
    default_message = "user already exists"


class InvalidCredentialsError(AuthError):
    kind = ErrorKind.INVALID_CREDENTIALS
    default_message = "invalid credentials"


class InternalError(AuthError):
    kind = ErrorKind.INTERNAL
    default_message = "internal error"
