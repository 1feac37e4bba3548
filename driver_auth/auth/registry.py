"""User registry contracts consumed by AuthService.

Registration only needs to save users and login only needs to look them up,
so each use case depends on its own narrow Protocol. Storage implementations
(see driver_auth.db) satisfy both.
"""

from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True)
class UserRecord:
    """A stored user. The password hash stays out of repr()."""

    id: int
    email: str
    password_hash: bytes = field(repr=False)


class UserSaver(Protocol):
    def save_user(self, email: str, password_hash: bytes) -> int:
        """
        Persist a new user and return its id.

        Must be atomic with respect to the email uniqueness check.

        Raises:
            DuplicateUserError: If the email is already registered
        """
        ...


class UserProvider(Protocol):
    def get_user_by_email(self, email: str) -> UserRecord:
        """
        Look up a user by email.

        Raises:
            UserNotFoundError: If no user has this email
        """
        ...


class UserRegistry(UserSaver, UserProvider, Protocol):
    """Storage that can both save and look up users."""
