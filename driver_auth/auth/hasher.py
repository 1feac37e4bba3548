"""Password hashing with bcrypt.

Hashes are returned and accepted as bytes, exactly as bcrypt produces them
(60 bytes, "$2b$" prefix). Callers treat them as opaque and only hand them
to the user registry for storage.

bcrypt only looks at the first 72 bytes of its input. Newer bcrypt releases
raise on longer input instead of ignoring the tail, so passwords are cut to
72 UTF-8 bytes here, on both the hash and the verify side. Password content
therefore never makes hashing fail; empty passwords are accepted too.
"""

import logging

import bcrypt

from ..exceptions import HashingError, MalformedHashError

logger = logging.getLogger(__name__)

BCRYPT_MAX_PASSWORD_BYTES = 72
DEFAULT_WORK_FACTOR = 10


def _password_bytes(password: str) -> bytes:
    # surrogatepass keeps lone surrogates encodable
    return password.encode("utf-8", errors="surrogatepass")[:BCRYPT_MAX_PASSWORD_BYTES]


class CredentialHasher:
    """Salted adaptive one-way hashing of passwords."""

    def __init__(self, work_factor: int = DEFAULT_WORK_FACTOR):
        """
        Args:
            work_factor: bcrypt cost (log2 rounds), 4..31
        """
        self.work_factor = work_factor

    def hash(self, password: str) -> bytes:
        """
        Hash a password with a fresh random salt.

        Args:
            password: Plain text password (may be empty)

        Returns:
            bcrypt hash bytes

        Raises:
            HashingError: If salt generation or hashing fails
        """
        secret = _password_bytes(password)
        try:
            salt = bcrypt.gensalt(rounds=self.work_factor)
            return bcrypt.hashpw(secret, salt)
        except (OSError, ValueError) as e:
            raise HashingError(
                "failed to generate password hash",
                {"work_factor": self.work_factor}
            ) from e

    def verify(self, password_hash: bytes, password: str) -> bool:
        """
        Check a password against a stored hash in constant time.

        Args:
            password_hash: Hash previously returned by hash()
            password: Plain text password to check

        Returns:
            True if the password matches, False otherwise

        Raises:
            MalformedHashError: If password_hash is not a bcrypt hash
        """
        if isinstance(password_hash, str):
            password_hash = password_hash.encode("ascii", errors="replace")

        secret = _password_bytes(password)
        try:
            return bcrypt.checkpw(secret, password_hash)
        except ValueError as e:
            logger.error(f"Stored password hash is malformed: {e}")
            raise MalformedHashError("stored password hash is malformed") from e
