"""In-memory user registry.

Keeps users in a dict guarded by a lock, so create-if-absent is atomic
across threads just like the SQLite unique constraint. Nothing survives
the process; use it for tests and throwaway local runs.
"""

import threading

from ..auth.registry import UserRecord
from ..exceptions import DuplicateUserError, UserNotFoundError


class InMemoryUserRegistry:
    """Process-local user storage keyed by email."""

    def __init__(self):
        self._lock = threading.Lock()
        self._users_by_email: dict[str, UserRecord] = {}
        self._next_id = 1

    def save_user(self, email: str, password_hash: bytes) -> int:
        with self._lock:
            if email in self._users_by_email:
                raise DuplicateUserError("user already exists", {"email": email})
            user_id = self._next_id
            self._next_id += 1
            self._users_by_email[email] = UserRecord(
                id=user_id, email=email, password_hash=password_hash
            )
        return user_id

    def get_user_by_email(self, email: str) -> UserRecord:
        with self._lock:
            user = self._users_by_email.get(email)
        if user is None:
            raise UserNotFoundError("user not found", {"email": email})
        return user

    def count_users(self) -> int:
        with self._lock:
            return len(self._users_by_email)
