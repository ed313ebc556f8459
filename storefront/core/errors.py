"""Error kinds surfaced to API callers.

Each error carries a stable ``code`` and the HTTP status it maps to, so the
exception handler in ``storefront.main`` can render them uniformly.
"""


class StorefrontError(Exception):
    """Base class for errors rendered as ``{"error": code, "detail": message}``."""

    code = "internal_error"
    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DuplicateEmailError(StorefrontError):
    """Raised when registering an email that already belongs to a user."""

    code = "duplicate_email"
    status_code = 409

    def __init__(self, message: str = "Email already in use") -> None:
        super().__init__(message)


class InvalidCredentialsError(StorefrontError):
    """Raised on login with an unknown email or a wrong password (same kind for both)."""

    code = "invalid_credentials"
    status_code = 401

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class UnauthenticatedError(StorefrontError):
    """Raised when a protected operation has no valid bearer token."""

    code = "unauthenticated"
    status_code = 401

    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message)


class InsufficientPermissionsError(StorefrontError):
    code = "insufficient_permissions"
    status_code = 403

    def __init__(
        self, message: str = "Insufficient permissions to access this resource"
    ) -> None:
        super().__init__(message)


class MissingIdentityContextError(StorefrontError):
    """Raised when authorization runs before authentication populated an identity."""

    code = "missing_identity_context"
    status_code = 500

    def __init__(self, message: str = "User not found in request context") -> None:
        super().__init__(message)


class ProductNotFoundError(StorefrontError):
    code = "product_not_found"
    status_code = 404

    def __init__(self, product_id: int) -> None:
        self.product_id = product_id
        super().__init__(f"Product #{product_id} not found")
