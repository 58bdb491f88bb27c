"""
Product service — catalog search, lookup, create/update, and the guarded delete.

Callers own the transaction (database.transactional); these functions only
flush. A delete is refused while any order item references the product, and
the delete statement itself is guarded by its affected-row count so that two
racing deletes of one id cannot both succeed.
"""

import logging

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from db_models import OrderItem, Product, product_category
from domain.errors import IntegrityConflictError, NotFoundError
from services import category_service

logger = logging.getLogger(__name__)


async def search_products(
    db: AsyncSession,
    *,
    name: str = "",
    page: int = 0,
    size: int = 20,
) -> tuple[list[Product], int]:
    """
    Page through products ordered by id, optionally filtered by a
    case-insensitive substring of the name.

    Returns:
        (products on the requested page, total number of matches)
    """
    conditions = []
    if name:
        conditions.append(Product.name.icontains(name, autoescape=True))

    total = await db.scalar(select(func.count(Product.id)).where(*conditions))
    res = await db.execute(
        select(Product)
        .where(*conditions)
        .order_by(Product.id)
        .limit(size)
        .offset(page * size)
    )
    return res.scalars().all(), total or 0


async def get_product(db: AsyncSession, *, product_id: int) -> Product:
    product = await db.get(Product, product_id)
    if not product:
        raise NotFoundError("Product", product_id)
    return product


async def create_product(
    db: AsyncSession,
    *,
    name: str,
    description: str,
    price: float,
    img_url: str | None,
    category_ids: list[int],
) -> Product:
    """Insert a product and its category links in one flush."""
    categories = await category_service.resolve_categories(db, category_ids)
    product = Product(
        name=name,
        description=description,
        price=price,
        img_url=img_url,
        categories=categories,
    )
    db.add(product)
    await db.flush()
    logger.info(f"Created product {product.id} ({product.name})")
    return product


async def update_product(
    db: AsyncSession,
    *,
    product_id: int,
    name: str,
    description: str,
    price: float,
    img_url: str | None,
    category_ids: list[int],
) -> Product:
    """Replace every field of an existing product, category set included."""
    product = await get_product(db, product_id=product_id)
    categories = await category_service.resolve_categories(db, category_ids)

    product.name = name
    product.description = description
    product.price = price
    product.img_url = img_url
    product.categories = categories

    await db.flush()
    logger.info(f"Updated product {product.id}")
    return product


async def find_dependents(db: AsyncSession, *, product_id: int) -> list[int]:
    """Ids of the orders whose items reference this product."""
    res = await db.execute(
        select(OrderItem.order_id)
        .where(OrderItem.product_id == product_id)
        .order_by(OrderItem.order_id)
    )
    return list(res.scalars().all())


async def delete_product(db: AsyncSession, *, product_id: int) -> None:
    """
    Delete a product that nothing depends on.

    Raises:
        NotFoundError: no such product (or a concurrent delete won)
        IntegrityConflictError: order items reference the product
    """
    exists = await db.scalar(select(Product.id).where(Product.id == product_id))
    if exists is None:
        raise NotFoundError("Product", product_id)

    dependents = await find_dependents(db, product_id=product_id)
    if dependents:
        logger.warning(f"Refused delete of product {product_id}: referenced by orders {dependents}")
        raise IntegrityConflictError(
            f"Cannot delete product {product_id}: referenced by {len(dependents)} order(s)",
            details={"orderIds": dependents},
        )

    try:
        await db.execute(
            delete(product_category).where(product_category.c.product_id == product_id)
        )
        res = await db.execute(delete(Product).where(Product.id == product_id))
    except IntegrityError:
        # An order item was committed between the check and the delete
        logger.warning(f"Delete of product {product_id} hit a foreign-key violation")
        raise IntegrityConflictError(f"Cannot delete product {product_id}: referential integrity violation")

    if res.rowcount == 0:
        raise NotFoundError("Product", product_id)
    logger.info(f"Deleted product {product_id}")
