"""
Product endpoints — public search/lookup, admin-only create/update/delete.

Order of checks on writes: authorization (dependency) → field rules →
store. Deletes add the integrity gate before the store mutation.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db, transactional
from db_models import Product
from deps import Pagination, pagination_params, require
from domain.enums import Operation
from domain.policy import Principal
from domain.responses import Page, StandardErrorResponse, page_of
from models import ProductMinResponse, ProductRequest, ProductResponse
from services import product_service
from utils.validators import require_valid_product

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/products", tags=["products"])

_error_responses = {
    400: {"model": StandardErrorResponse},
    401: {"model": StandardErrorResponse},
    403: {"model": StandardErrorResponse},
    404: {"model": StandardErrorResponse},
    422: {"model": StandardErrorResponse},
}


def _to_response(product: Product) -> ProductResponse:
    return ProductResponse.model_validate(product)


@router.get("", response_model=Page[ProductMinResponse])
async def search_products(
    name: str = Query("", max_length=80, description="Case-insensitive name filter"),
    paging: Pagination = Depends(pagination_params),
    db: AsyncSession = Depends(get_db),
):
    products, total = await product_service.search_products(
        db, name=name, page=paging["page"], size=paging["size"]
    )
    return page_of(
        [ProductMinResponse.model_validate(p) for p in products],
        page=paging["page"],
        size=paging["size"],
        total=total,
    )


@router.get("/{product_id}", response_model=ProductResponse, responses=_error_responses)
async def get_product(
    product_id: int,
    db: AsyncSession = Depends(get_db),
):
    product = await product_service.get_product(db, product_id=product_id)
    return _to_response(product)


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_error_responses,
)
async def insert_product(
    request: ProductRequest,
    response: Response,
    principal: Optional[Principal] = Depends(require(Operation.INSERT)),
    db: AsyncSession = Depends(get_db),
):
    require_valid_product(request)

    async with transactional(db):
        product = await product_service.create_product(
            db,
            name=request.name,
            description=request.description,
            price=request.price,
            img_url=request.img_url,
            category_ids=[c.id for c in request.categories],
        )

    response.headers["Location"] = f"/products/{product.id}"
    logger.info(f"Product {product.id} inserted by {principal.username}")
    return _to_response(product)


@router.put("/{product_id}", response_model=ProductResponse, responses=_error_responses)
async def update_product(
    product_id: int,
    request: ProductRequest,
    principal: Optional[Principal] = Depends(require(Operation.UPDATE)),
    db: AsyncSession = Depends(get_db),
):
    require_valid_product(request)

    async with transactional(db):
        product = await product_service.update_product(
            db,
            product_id=product_id,
            name=request.name,
            description=request.description,
            price=request.price,
            img_url=request.img_url,
            category_ids=[c.id for c in request.categories],
        )

    return _to_response(product)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_error_responses,
)
async def delete_product(
    product_id: int,
    principal: Optional[Principal] = Depends(require(Operation.DELETE)),
    db: AsyncSession = Depends(get_db),
):
    async with transactional(db):
        await product_service.delete_product(db, product_id=product_id)

    logger.info(f"Product {product_id} deleted by {principal.username}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
