"""SQLite-backed user registry.

IMPORT CONVENTION:
- Use through driver_auth.db: `from driver_auth.db import SQLiteUserRegistry`

Uniqueness of email is guaranteed by the UNIQUE constraint on users.email
(see schema.sql). save_user never checks for an existing row first; a
violated constraint is reported as DuplicateUserError.
"""

import sqlite3

from ..auth.registry import UserRecord
from ..config import settings
from ..exceptions import DatabaseError, DuplicateUserError, UserNotFoundError
from ..utils import isodatetime
from .connection import connect


def _is_unique_violation(error: sqlite3.IntegrityError) -> bool:
    return "UNIQUE constraint failed" in str(error)


class SQLiteUserRegistry:
    """User storage in the SQLite users table.

    Satisfies the UserSaver and UserProvider contracts.
    """

    def __init__(self, database_path: str | None = None, timeout: float | None = None):
        """
        Args:
            database_path: SQLite file path (default: settings.database_path)
            timeout: Seconds to wait for a locked database (default: settings.database_timeout)
        """
        self.database_path = database_path or settings.database_path
        self.timeout = settings.database_timeout if timeout is None else timeout

    def _connect(self) -> sqlite3.Connection:
        try:
            return connect(self.database_path, self.timeout)
        except sqlite3.Error as e:
            raise DatabaseError(
                "failed to open database",
                {"database_path": self.database_path}
            ) from e

    def save_user(self, email: str, password_hash: bytes) -> int:
        """
        Insert a new user.

        Args:
            email: Unique account email
            password_hash: Hash produced by CredentialHasher

        Returns:
            Newly assigned user id

        Raises:
            DuplicateUserError: If a user with this email exists
            DatabaseError: On any other storage failure
        """
        conn = self._connect()
        try:
            with conn:
                cursor = conn.execute(
                    """INSERT INTO users (email, pass_hash, created_at)
                       VALUES (?, ?, ?)""",
                    (email, password_hash, isodatetime.now())
                )
            return cursor.lastrowid
        except sqlite3.IntegrityError as e:
            if _is_unique_violation(e):
                raise DuplicateUserError("user already exists", {"email": email}) from e
            raise DatabaseError("failed to save user", {"email": email}) from e
        except sqlite3.Error as e:
            raise DatabaseError("failed to save user", {"email": email}) from e
        finally:
            conn.close()

    def get_user_by_email(self, email: str) -> UserRecord:
        """
        Look up a user by email.

        Raises:
            UserNotFoundError: If no user has this email
            DatabaseError: On storage failure
        """
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT id, email, pass_hash FROM users WHERE email = ?",
                (email,)
            ).fetchone()
        except sqlite3.Error as e:
            raise DatabaseError("failed to get user", {"email": email}) from e
        finally:
            conn.close()

        if row is None:
            raise UserNotFoundError("user not found", {"email": email})

        return UserRecord(
            id=row["id"],
            email=row["email"],
            password_hash=bytes(row["pass_hash"]),
        )

    def count_users(self) -> int:
        """Count registered users."""
        conn = self._connect()
        try:
            return conn.execute("SELECT COUNT(*) FROM users").fetchone()[0]
        except sqlite3.Error as e:
            raise DatabaseError("failed to count users") from e
        finally:
            conn.close()
