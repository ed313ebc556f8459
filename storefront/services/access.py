"""Role-based access policy and the guard that enforces it per request.

A request moves Unauthenticated -> Authenticated (valid bearer token) ->
Authorized or Forbidden (role checked against the operation's required roles).
"""

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from storefront.core.errors import (
    InsufficientPermissionsError,
    MissingIdentityContextError,
    UnauthenticatedError,
)
from storefront.core.security import InvalidTokenError, TokenIssuer
from storefront.schemas.auth import Identity, Role

logger = logging.getLogger(__name__)

# Operation identifiers used by the API routers.
AUTH_ME = "auth:me"
PRODUCTS_CREATE = "products:create"
PRODUCTS_UPDATE = "products:update"
PRODUCTS_DELETE = "products:delete"


class AccessPolicy:
    """Immutable table of operation identifier -> roles allowed to invoke it."""

    def __init__(self, rules: Mapping[str, Iterable[Role | str]] | None = None) -> None:
        self._rules: Mapping[str, frozenset[Role]] = MappingProxyType(
            {op: frozenset(Role(r) for r in roles) for op, roles in (rules or {}).items()}
        )

    def required_roles(self, operation: str) -> frozenset[Role]:
        """Roles allowed for operation; empty when the operation declares none."""
        return self._rules.get(operation, frozenset())

    def __contains__(self, operation: object) -> bool:
        return operation in self._rules


DEFAULT_POLICY = AccessPolicy(
    {
        AUTH_ME: (),
        PRODUCTS_CREATE: (Role.ADMIN,),
        PRODUCTS_UPDATE: (Role.ADMIN,),
        PRODUCTS_DELETE: (Role.ADMIN,),
    }
)


class AccessGuard:
    """Authenticates bearer tokens and authorizes identities against an AccessPolicy."""

    def __init__(self, issuer: TokenIssuer, policy: AccessPolicy = DEFAULT_POLICY) -> None:
        self.issuer = issuer
        self.policy = policy

    def authenticate(self, token: str | None) -> Identity:
        """Resolve the caller's identity. Raises UnauthenticatedError if the token is missing or invalid."""
        if not token:
            raise UnauthenticatedError()
        try:
            claims = self.issuer.verify(token)
        except InvalidTokenError as e:
            logger.info("Rejected bearer token: %s", e.message)
            raise UnauthenticatedError(e.message) from e
        return Identity.from_claims(claims)

    def authorize(self, identity: Identity | None, operation: str) -> Identity:
        """
        Allow or deny identity for operation and return it on success.

        A missing identity means authentication never ran for this request;
        that is a wiring fault and is raised as MissingIdentityContextError
        rather than treated as an anonymous caller.
        """
        if identity is None:
            logger.error("Authorization for %s invoked without an identity", operation)
            raise MissingIdentityContextError()

        required = self.policy.required_roles(operation)
        if not required:
            return identity
        if identity.role in required:
            return identity

        logger.warning(
            "Forbidden: user_id=%s role=%s operation=%s",
            identity.user_id,
            identity.role.value,
            operation,
        )
        raise InsufficientPermissionsError()

    def check(self, token: str | None, operation: str) -> Identity:
        """Authenticate then authorize in one step."""
        return self.authorize(self.authenticate(token), operation)
