"""Registration, credential validation and login."""

import logging

from storefront.core.errors import DuplicateEmailError, InvalidCredentialsError
from storefront.core.security import PasswordHasher, TokenIssuer
from storefront.models import User
from storefront.schemas.auth import Role
from storefront.services.users import UserStore

logger = logging.getLogger(__name__)


class AuthService:
    """
    Orchestrates the user store, password hasher and token issuer.

    Collaborators are passed in explicitly; the API layer builds one per request
    around that request's database session.
    """

    def __init__(self, store: UserStore, hasher: PasswordHasher, issuer: TokenIssuer) -> None:
        self.store = store
        self.hasher = hasher
        self.issuer = issuer

    def register(self, email: str, password: str, role: Role | None = None) -> User:
        """
        Create a user with a hashed password. role defaults to Role.USER.

        Raises DuplicateEmailError if the email is taken. The early lookup only
        avoids hashing for an obvious duplicate; the store's unique constraint
        still decides races between concurrent registrations.
        """
        logger.info("Registering user: email=%s", email)

        if self.store.find_by_email(email) is not None:
            logger.warning("Registration attempted with existing email: %s", email)
            raise DuplicateEmailError()

        logger.debug("Hashing password for email=%s", email)
        password_hash = self.hasher.hash(password)

        user = self.store.create(email, password_hash, role or Role.USER)
        logger.info("User registered: id=%s role=%s", user.id, user.role)
        return user

    def validate_credentials(self, email: str, password: str) -> User | None:
        """
        Return the user when email and password match, else None.

        None is a negative result, not an error, and does not say which half
        of the pair was wrong.
        """
        logger.debug("Validating credentials: email=%s", email)
        user = self.store.find_by_email(email, include_password=True)
        if user is None:
            self.hasher.verify_absent(password)
        elif self.hasher.verify(password, user.password):
            return user
        logger.warning("Credential validation failed: email=%s", email)
        return None

    def login(self, email: str, password: str) -> str:
        """Return a signed access token. Raises InvalidCredentialsError for any mismatch."""
        logger.info("Login attempt: email=%s", email)
        user = self.validate_credentials(email, password)
        if user is None:
            raise InvalidCredentialsError()

        token = self.issuer.sign(subject=user.id, email=user.email, role=user.role)
        logger.info("User logged in: id=%s", user.id)
        return token
