"""Authentication module for driver-auth.

This module provides:
- Password hashing and verification (hasher)
- User registry contracts (registry)
- JWT token issuing (token)
- Registration and login orchestration (service)
- Schema validation for auth requests (schemas)

Auth endpoints (see driver_auth.api):
- POST /signup - Register a new user
- POST /signin - Authenticate and return a JWT token for an app
"""

from . import schemas
from .hasher import CredentialHasher
from .registry import UserProvider, UserRecord, UserRegistry, UserSaver
from .service import AuthService
from .token import TokenIssuer

__all__ = [
    "schemas",
    "AuthService",
    "CredentialHasher",
    "TokenIssuer",
    "UserProvider",
    "UserRecord",
    "UserRegistry",
    "UserSaver",
]
