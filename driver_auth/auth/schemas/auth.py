"""Pydantic schemas for sign-up, sign-in and token claims.

Request schemas reject malformed or empty input before it reaches
AuthService. Password strength is not checked here; any non-empty
password is accepted.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Credentials(BaseModel):
    """Email and password pair shared by sign-up and sign-in."""

    email: str = Field(..., min_length=3, max_length=254, description="Account email")
    password: str = Field(..., min_length=1, description="Plain text password")

    @field_validator("email")
    @classmethod
    def email_has_at_sign(cls, v: str) -> str:
        """Strip surrounding whitespace and require a local part and a domain."""
        v = v.strip()
        local, sep, domain = v.rpartition("@")
        if not sep or not local or not domain:
            raise ValueError("email must be of the form name@domain")
        return v


class SignUpRequest(Credentials):
    """Body of POST /signup."""


class SignUpResponse(BaseModel):
    """Body returned by POST /signup."""

    id: int


class SignInRequest(Credentials):
    """Body of POST /signin.

    The wire field is appId; app_id is accepted as well.
    """

    model_config = ConfigDict(populate_by_name=True)

    app_id: int = Field(..., alias="appId", strict=True, description="Requesting application")


class SignInResponse(BaseModel):
    """Body returned by POST /signin."""

    token: str


class TokenClaims(BaseModel):
    """Claims carried by an issued bearer token.

    sub is the user id as a string (JWT requires a string subject);
    iat and exp are Unix seconds and exp == iat + ttl.
    """

    sub: str
    app_id: int
    iat: int
    exp: int
