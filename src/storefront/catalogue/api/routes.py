"""FastAPI endpoints for the product catalogue."""

import json

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from storefront.catalogue.api.schemas import (
    ProductIdResponse,
    ProductPageResponse,
    ProductRequest,
    ProductResponse,
)
from storefront.catalogue.management import CreateProduct, DeleteProduct, UpdateProduct
from storefront.catalogue.queries import DEFAULT_PAGE_SIZE, get_product, list_products
from storefront.identity.api.dependencies import require_admin
from storefront.identity.tokens import Principal

product_router = APIRouter(prefix="/products", tags=["products"])


def _product_response(product) -> ProductResponse:
    return ProductResponse(
        product_id=str(product.id),
        name=product.name,
        description=product.description,
        price=product.price,
        stock_quantity=product.stock_quantity,
        category=product.category,
        images=list(product.images or []),
        rating=product.rating or 0.0,
        review_count=product.review_count or 0,
        active=product.active,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


@product_router.get("", response_model=ProductPageResponse)
async def browse_products(
    search: str | None = None,
    category: str | None = None,
    min_price: float | None = Query(None, ge=0),
    max_price: float | None = Query(None, ge=0),
    page: int = Query(0, ge=0),
    size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=100),
) -> ProductPageResponse:
    results = list_products(
        search=search,
        category=category,
        min_price=min_price,
        max_price=max_price,
        page=page,
        size=size,
    )
    return ProductPageResponse(
        items=[_product_response(p) for p in results.items],
        total=results.total,
        page=page,
        size=size,
    )


@product_router.get("/{product_id}", response_model=ProductResponse)
async def read_product(product_id: str) -> ProductResponse:
    return _product_response(get_product(product_id))


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(
    body: ProductRequest,
    admin: Principal = Depends(require_admin),
) -> ProductIdResponse:
    command = CreateProduct(
        name=body.name,
        description=body.description,
        price=body.price,
        stock_quantity=body.stock_quantity,
        category=body.category,
        images=json.dumps(body.images),
        rating=body.rating,
        active=body.active,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    body: ProductRequest,
    admin: Principal = Depends(require_admin),
) -> ProductResponse:
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        stock_quantity=body.stock_quantity,
        category=body.category,
        images=json.dumps(body.images),
        active=body.active,
    )
    current_domain.process(command, asynchronous=False)
    return _product_response(get_product(product_id))


@product_router.delete("/{product_id}", status_code=204)
async def delete_product(product_id: str, admin: Principal = Depends(require_admin)) -> None:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
