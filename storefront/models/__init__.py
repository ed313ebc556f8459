"""SQLAlchemy ORM models."""

from storefront.models.base import Base
from storefront.models.product import Product
from storefront.models.user import User

__all__ = ["Base", "Product", "User"]
