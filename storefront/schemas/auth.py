"""Request/response schemas for auth endpoints, plus token claims and roles."""

from datetime import datetime
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, Field, TypeAdapter


class Role(str, Enum):
    """Closed set of role tags. USER is the lowest privilege and the default."""

    USER = "user"
    ADMIN = "admin"


LoginEmail = Annotated[EmailStr, Field(max_length=255, description="Login email")]

_login_email = TypeAdapter(LoginEmail)


def normalize_email(value: str) -> str:
    """
    Validate and normalize an email the way request bodies do (domain lowercased).
    Raises pydantic.ValidationError for malformed addresses.
    """
    return _login_email.validate_python(value.strip())


class RegisterRequest(BaseModel):
    """Credentials (and optional role) for registration."""

    email: LoginEmail
    password: str = Field(..., min_length=1, max_length=128, description="Password")
    role: Role | None = Field(default=None, description="Defaults to 'user'")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: LoginEmail
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class TokenResponse(BaseModel):
    """JWT access token returned after successful login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")


class UserRead(BaseModel):
    """Registered user as returned to clients (no password)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    role: Role
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TokenClaims(BaseModel):
    """Verified claim set decoded from a session token."""

    sub: str = Field(..., pattern=r"^\d+$", description="User id")
    email: str
    role: Role
    iat: datetime
    exp: datetime


class Identity(BaseModel):
    """Authenticated caller (user id, email, role) resolved from a bearer token."""

    user_id: int
    email: str
    role: Role

    @classmethod
    def from_claims(cls, claims: TokenClaims) -> "Identity":
        return cls(user_id=int(claims.sub), email=claims.email, role=claims.role)
