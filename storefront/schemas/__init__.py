"""Pydantic request/response schemas."""

from storefront.schemas.auth import (
    Identity,
    LoginRequest,
    RegisterRequest,
    Role,
    TokenClaims,
    TokenResponse,
    UserRead,
)
from storefront.schemas.health import HealthResponse
from storefront.schemas.products import ProductCreate, ProductRead, ProductUpdate

__all__ = [
    "HealthResponse",
    "Identity",
    "LoginRequest",
    "ProductCreate",
    "ProductRead",
    "ProductUpdate",
    "RegisterRequest",
    "Role",
    "TokenClaims",
    "TokenResponse",
    "UserRead",
]
