"""ORM model for application users (auth and RBAC)."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import deferred

from storefront.models.base import Base, TimestampMixin


class User(TimestampMixin, Base):
    """
    User account for JWT authentication and role-based access control.

    role: 'admin' or 'user'. The password hash is deferred so ordinary
    reads never load it.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password = deferred(Column(String(255), nullable=False))
    role = Column(String(32), nullable=False, default="user", server_default="user")

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r} role={self.role!r}>"
