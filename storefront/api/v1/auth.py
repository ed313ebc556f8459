"""Registration, JWT login, and the current-identity endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from storefront.api.deps import get_auth_service, require_access
from storefront.schemas.auth import (
    Identity,
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserRead,
)
from storefront.services.access import AUTH_ME
from storefront.services.auth import AuthService

router = APIRouter()


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> UserRead:
    """
    Register a new user. role defaults to 'user'.
    Returns 409 if the email is already registered. The password is never returned.
    """
    user = auth.register(body.email, body.password, body.role)
    return UserRead.model_validate(user)


@router.post("/login", response_model=TokenResponse)
def login(
    body: LoginRequest,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> TokenResponse:
    """
    Authenticate with email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <access_token>
    """
    token = auth.login(body.email, body.password)
    return TokenResponse(access_token=token, token_type="bearer")


@router.get("/me", response_model=Identity)
def me(identity: Annotated[Identity, Depends(require_access(AUTH_ME))]) -> Identity:
    """Return the identity carried by the caller's token."""
    return identity
