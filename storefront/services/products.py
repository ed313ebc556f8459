"""Product CRUD over the products table."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.core.errors import ProductNotFoundError
from storefront.models import Product
from storefront.schemas.products import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)


class ProductService:
    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, data: ProductCreate) -> Product:
        logger.info("Creating product: %s", data.name)
        product = Product(**data.model_dump())
        self.session.add(product)
        self.session.commit()
        self.session.refresh(product)
        logger.info("Product created: id=%s", product.id)
        return product

    def list_all(self) -> list[Product]:
        products = list(self.session.scalars(select(Product).order_by(Product.id)))
        logger.debug("Found %s products", len(products))
        return products

    def get(self, product_id: int) -> Product:
        """Return the product or raise ProductNotFoundError."""
        product = self.session.get(Product, product_id)
        if product is None:
            logger.warning("Product #%s not found", product_id)
            raise ProductNotFoundError(product_id)
        return product

    def update(self, product_id: int, data: ProductUpdate) -> Product:
        """Apply only the fields the client sent; other columns are left untouched."""
        product = self.get(product_id)
        changes = data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            setattr(product, field, value)
        self.session.commit()
        self.session.refresh(product)
        logger.info("Product #%s updated: fields=%s", product_id, sorted(changes))
        return product

    def remove(self, product_id: int) -> None:
        product = self.get(product_id)
        self.session.delete(product)
        self.session.commit()
        logger.warning("Product #%s removed", product_id)
