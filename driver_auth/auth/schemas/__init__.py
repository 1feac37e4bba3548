"""Authentication Pydantic schemas for API validation."""

from .auth import (
    Credentials,
    SignUpRequest,
    SignUpResponse,
    SignInRequest,
    SignInResponse,
    TokenClaims,
)

__all__ = [
    "Credentials",
    "SignUpRequest",
    "SignUpResponse",
    "SignInRequest",
    "SignInResponse",
    "TokenClaims",
]
