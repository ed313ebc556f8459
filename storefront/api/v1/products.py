"""Product CRUD. Reads are public; writes require the roles in the access policy."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from storefront.api.deps import get_product_service, require_access
from storefront.schemas.auth import Identity
from storefront.schemas.products import ProductCreate, ProductRead, ProductUpdate
from storefront.services.access import PRODUCTS_CREATE, PRODUCTS_DELETE, PRODUCTS_UPDATE
from storefront.services.products import ProductService

router = APIRouter()


@router.get("", response_model=list[ProductRead])
def list_products(
    products: Annotated[ProductService, Depends(get_product_service)],
) -> list[ProductRead]:
    return [ProductRead.model_validate(p) for p in products.list_all()]


@router.get("/{product_id}", response_model=ProductRead)
def get_product(
    product_id: int,
    products: Annotated[ProductService, Depends(get_product_service)],
) -> ProductRead:
    """Return one product; 404 if it does not exist."""
    return ProductRead.model_validate(products.get(product_id))


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
def create_product(
    body: ProductCreate,
    products: Annotated[ProductService, Depends(get_product_service)],
    _identity: Annotated[Identity, Depends(require_access(PRODUCTS_CREATE))],
) -> ProductRead:
    """Create a product (admin only)."""
    return ProductRead.model_validate(products.create(body))


@router.put("/{product_id}", response_model=ProductRead)
def update_product(
    product_id: int,
    body: ProductUpdate,
    products: Annotated[ProductService, Depends(get_product_service)],
    _identity: Annotated[Identity, Depends(require_access(PRODUCTS_UPDATE))],
) -> ProductRead:
    """Update the fields sent in the body (admin only)."""
    return ProductRead.model_validate(products.update(product_id, body))


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: int,
    products: Annotated[ProductService, Depends(get_product_service)],
    _identity: Annotated[Identity, Depends(require_access(PRODUCTS_DELETE))],
) -> Response:
    """Delete a product (admin only)."""
    products.remove(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
