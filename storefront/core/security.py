"""Password hashing and JWT creation/verification for authentication."""

import secrets
from datetime import UTC, datetime, timedelta
from functools import cached_property
from typing import TYPE_CHECKING, Any

import bcrypt
import jwt
from pydantic import ValidationError

from storefront.schemas.auth import Role, TokenClaims

if TYPE_CHECKING:
    from storefront.core.config import Settings

# Bcrypt cost (rounds); 10 keeps login latency low while staying well above the minimum.
DEFAULT_BCRYPT_ROUNDS = 10

# bcrypt only looks at the first 72 bytes of the password.
BCRYPT_MAX_BYTES = 72

REQUIRED_CLAIMS = ("sub", "email", "role", "exp", "iat")


class InvalidTokenError(Exception):
    """Raised for any token that fails verification (bad signature, expired, malformed)."""

    def __init__(self, message: str = "Invalid or expired token") -> None:
        self.message = message
        super().__init__(message)


class PasswordHasher:
    """Salted one-way password hashing backed by bcrypt."""

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        self.rounds = rounds

    @classmethod
    def from_settings(cls, settings: "Settings") -> "PasswordHasher":
        return cls(rounds=settings.BCRYPT_ROUNDS)

    @staticmethod
    def _encode(plain_password: str) -> bytes:
        return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]

    def hash(self, plain_password: str) -> str:
        """Hash a plain-text password for storage. A fresh salt is drawn on every call."""
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(self._encode(plain_password), salt).decode("utf-8")

    def verify(self, plain_password: str, hashed: str | None) -> bool:
        """Verify a plain password against a stored hash. Malformed hashes never match."""
        if not hashed:
            return False
        try:
            return bcrypt.checkpw(self._encode(plain_password), hashed.encode("utf-8"))
        except (ValueError, TypeError):
            return False

    @cached_property
    def _dummy_hash(self) -> str:
        return self.hash(secrets.token_urlsafe(16))

    def verify_absent(self, plain_password: str) -> bool:
        """
        Run one checkpw against a throwaway hash and return False.
        Used when no account exists so the lookup costs as much as a wrong password.
        """
        self.verify(plain_password, self._dummy_hash)
        return False


class TokenIssuer:
    """Signs and verifies HMAC JWT session tokens with a process-wide secret."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expire_minutes: int = 60,
    ) -> None:
        if not secret:
            raise ValueError("Token signing secret must be non-empty")
        self._secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, settings: "Settings") -> "TokenIssuer":
        return cls(
            secret=settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            expire_minutes=settings.JWT_EXPIRE_MINUTES,
        )

    def sign(
        self,
        subject: str | int,
        email: str,
        role: Role | str,
        *,
        expires_in: timedelta | None = None,
    ) -> str:
        """Create a JWT access token with sub (user id), email, role, iat and exp."""
        now = datetime.now(UTC)
        lifetime = expires_in if expires_in is not None else timedelta(minutes=self.expire_minutes)
        payload: dict[str, Any] = {
            "sub": str(subject),
            "email": email,
            "role": Role(role).value,
            "iat": now,
            "exp": now + lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Decode and validate a JWT; return its claims.
        Raises InvalidTokenError on any failure, without saying which check failed.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": list(REQUIRED_CLAIMS)},
            )
            return TokenClaims.model_validate(payload)
        except (jwt.PyJWTError, ValidationError) as e:
            raise InvalidTokenError() from e
