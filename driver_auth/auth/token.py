"""JWT bearer token issuing.

Tokens are HMAC-signed with a secret handed to TokenIssuer at construction
(loaded once from Settings at startup). Claims:

- sub: user id (string)
- app_id: id of the application the token is scoped to
- iat: issue time, Unix seconds
- exp: iat + ttl, Unix seconds

Verifying or decoding tokens is not done here; consumers of the token
validate it with the same secret.
"""

from datetime import datetime, timedelta
from typing import Callable

import jwt

from ..exceptions import ConfigurationError, TokenSigningError
from ..utils import isodatetime
from .schemas import TokenClaims

SYMMETRIC_ALGORITHMS = frozenset({"HS256", "HS384", "HS512"})


class TokenIssuer:
    """Signs time-bounded tokens carrying user and application identity."""

    def __init__(
        self,
        secret: str | bytes,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] | None = None,
    ):
        """
        Args:
            secret: Symmetric signing key
            algorithm: HMAC algorithm name
            clock: Returns the current time; defaults to UTC now

        Raises:
            ConfigurationError: If the secret is empty or the algorithm
                is not a symmetric HMAC algorithm
        """
        if not secret:
            raise ConfigurationError("token signing secret must not be empty")
        if algorithm not in SYMMETRIC_ALGORITHMS:
            raise ConfigurationError(
                f"unsupported token algorithm: {algorithm}",
                {"supported": sorted(SYMMETRIC_ALGORITHMS)}
            )
        self._secret = secret
        self.algorithm = algorithm
        self._clock = clock or isodatetime.utcnow

    def build_claims(self, user_id: int, app_id: int, ttl: timedelta) -> TokenClaims:
        """
        Build claims for a token issued now.

        Raises:
            ConfigurationError: If ttl is not a positive whole number of seconds
        """
        if ttl <= timedelta(0) or ttl.microseconds:
            raise ConfigurationError(
                "token ttl must be a positive whole number of seconds",
                {"ttl_seconds": ttl.total_seconds()}
            )

        issued_at = isodatetime.to_unix(self._clock())
        return TokenClaims(
            sub=str(user_id),
            app_id=app_id,
            iat=issued_at,
            exp=issued_at + int(ttl.total_seconds()),
        )

    def issue(self, user_id: int, app_id: int, ttl: timedelta) -> str:
        """
        Issue a signed token for a user within an application.

        Args:
            user_id: Subject of the token
            app_id: Application the token is scoped to
            ttl: Token lifetime

        Returns:
            Encoded JWT string

        Raises:
            TokenSigningError: If the signing library fails
        """
        claims = self.build_claims(user_id, app_id, ttl)
        try:
            return jwt.encode(claims.model_dump(), self._secret, algorithm=self.algorithm)
        except (jwt.PyJWTError, NotImplementedError, TypeError, ValueError) as e:
            raise TokenSigningError(
                "failed to sign token",
                {"algorithm": self.algorithm}
            ) from e
