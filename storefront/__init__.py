"""Storefront API: user auth with role-based access control, and product CRUD."""

__version__ = "0.1.0"
