"""Authentication service: user registration and login.

AuthService ties together the password hasher, the user registry and the
token issuer. It holds no per-request state, so one instance is shared by
all request handlers.

Every failure is returned as an AuthError subclass (see exceptions.py):

- UserExistsError: the email is already registered
- InvalidCredentialsError: unknown email OR wrong password. Callers
  cannot tell the two cases apart.
- InternalError: anything else (storage, hashing, signing). The cause is
  chained and logged here; callers must not show it to end users.

Email uniqueness is enforced by the registry alone; there is no lookup
before save_user.
"""

import logging
from datetime import timedelta

from ..exceptions import (
    DuplicateUserError,
    HashingError,
    InternalError,
    InvalidCredentialsError,
    MalformedHashError,
    UserExistsError,
    UserNotFoundError,
)
from .hasher import CredentialHasher
from .registry import UserProvider, UserSaver
from .token import TokenIssuer

logger = logging.getLogger(__name__)


class AuthService:
    """Registers users and logs them in."""

    def __init__(
        self,
        *,
        user_saver: UserSaver,
        user_provider: UserProvider,
        token_issuer: TokenIssuer,
        token_ttl: timedelta,
        hasher: CredentialHasher | None = None,
    ):
        """
        Args:
            user_saver: Persists new users (registration)
            user_provider: Looks up users by email (login)
            token_issuer: Signs tokens on successful login
            token_ttl: Lifetime of issued tokens
            hasher: Password hasher; defaults to bcrypt at default cost
        """
        self._user_saver = user_saver
        self._user_provider = user_provider
        self._token_issuer = token_issuer
        self._token_ttl = token_ttl
        self._hasher = hasher or CredentialHasher()

    @property
    def token_ttl(self) -> timedelta:
        return self._token_ttl

    def register_new_user(self, email: str, password: str) -> int:
        """
        Register a new user and return the assigned user id.

        Raises:
            UserExistsError: If the email is already registered
            InternalError: On hashing or storage failure
        """
        op = "AuthService.register_new_user"
        logger.info(f"{op}: registering user {email}")

        try:
            password_hash = self._hasher.hash(password)
        except HashingError as e:
            logger.error(f"{op}: failed to generate password hash: {e}")
            raise InternalError(op) from e

        try:
            user_id = self._user_saver.save_user(email, password_hash)
        except DuplicateUserError as e:
            logger.warning(f"{op}: user already exists: {email}")
            raise UserExistsError(op) from e
        except Exception as e:
            logger.error(f"{op}: failed to save user {email}: {e!r}")
            raise InternalError(op) from e

        logger.info(f"{op}: user registered: id={user_id}")
        return user_id

    def login(self, email: str, password: str, app_id: int) -> str:
        """
        Check credentials and issue a token scoped to app_id.

        Returns:
            Signed bearer token

        Raises:
            InvalidCredentialsError: If the email is unknown or the password is wrong
            InternalError: On storage failure, corrupt stored hash or signing failure
        """
        op = "AuthService.login"
        logger.info(f"{op}: attempting to login user {email} for app {app_id}")

        try:
            user = self._user_provider.get_user_by_email(email)
        except UserNotFoundError as e:
            logger.warning(f"{op}: invalid credentials for {email}: user not found")
            raise InvalidCredentialsError(op) from e
        except Exception as e:
            logger.error(f"{op}: failed to get user {email}: {e!r}")
            raise InternalError(op) from e

        try:
            matches = self._hasher.verify(user.password_hash, password)
        except MalformedHashError as e:
            logger.error(f"{op}: stored hash for user id={user.id} is malformed")
            raise InternalError(op) from e
        except Exception as e:
            logger.error(f"{op}: failed to verify password for user id={user.id}: {e!r}")
            raise InternalError(op) from e

        if not matches:
            logger.warning(f"{op}: invalid credentials for {email}: password mismatch")
            raise InvalidCredentialsError(op)

        try:
            token = self._token_issuer.issue(user.id, app_id, self._token_ttl)
        except Exception as e:
            logger.error(f"{op}: failed to issue token for user id={user.id}: {e!r}")
            raise InternalError(op) from e

        logger.info(f"{op}: user logged in successfully: id={user.id}")
        return token
