"""FastAPI dependencies: service assembly and the authentication -> authorization chain."""

from collections.abc import Callable
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from storefront.core.config import get_settings
from storefront.core.database import get_db
from storefront.core.security import PasswordHasher, TokenIssuer
from storefront.schemas.auth import Identity
from storefront.services.access import DEFAULT_POLICY, AccessGuard
from storefront.services.auth import AuthService
from storefront.services.products import ProductService
from storefront.services.users import SqlUserStore

security = HTTPBearer(auto_error=False)


@lru_cache
def get_token_issuer() -> TokenIssuer:
    """Process-wide issuer; the signing key is read once from settings."""
    return TokenIssuer.from_settings(get_settings())


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher.from_settings(get_settings())


def get_access_guard(
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> AccessGuard:
    return AccessGuard(issuer, DEFAULT_POLICY)


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> AuthService:
    return AuthService(SqlUserStore(db), hasher, issuer)


def get_product_service(db: Annotated[Session, Depends(get_db)]) -> ProductService:
    return ProductService(db)


def get_current_identity(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
) -> Identity:
    """Dependency: require a valid Bearer JWT; stores the identity on request.state."""
    token = credentials.credentials if credentials is not None else None
    identity = guard.authenticate(token)
    request.state.identity = identity
    return identity


def require_access(operation: str) -> Callable[..., Identity]:
    """
    Build a dependency that authorizes the current identity for operation.

    Required roles come from the guard's AccessPolicy, not from the route.
    """

    def dependency(
        request: Request,
        _authenticated: Annotated[Identity, Depends(get_current_identity)],
        guard: Annotated[AccessGuard, Depends(get_access_guard)],
    ) -> Identity:
        return guard.authorize(getattr(request.state, "identity", None), operation)

    dependency.__name__ = f"require_access[{operation}]"
    return dependency
