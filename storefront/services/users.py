"""User persistence: lookup by email/id and insert with storage-level uniqueness."""

import logging
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, undefer

from storefront.core.errors import DuplicateEmailError
from storefront.models import User
from storefront.schemas.auth import Role

logger = logging.getLogger(__name__)


class UserStore(Protocol):
    """What the auth service needs from user persistence. No update or delete."""

    def find_by_email(self, email: str, *, include_password: bool = False) -> User | None: ...

    def create(self, email: str, password_hash: str, role: Role) -> User: ...


class SqlUserStore:
    """UserStore over a SQLAlchemy session. The unique index on email is authoritative."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find_by_email(self, email: str, *, include_password: bool = False) -> User | None:
        stmt = select(User).where(User.email == email)
        if include_password:
            stmt = stmt.options(undefer(User.password))
        return self.session.scalars(stmt).first()

    def create(self, email: str, password_hash: str, role: Role) -> User:
        """
        Insert and commit a new user; id and timestamps are assigned by the database.
        Raises DuplicateEmailError if the email is already taken, including when a
        concurrent registration committed first.
        """
        user = User(email=email, password=password_hash, role=Role(role).value)
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            logger.warning("Unique constraint rejected user insert: email=%s", email)
            raise DuplicateEmailError() from e
        self.session.refresh(user)
        return user
