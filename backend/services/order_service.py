"""
Order service — lookups and order placement.

Order items are what make a product undeletable (see product_service).
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from db_models import Order, OrderItem, User
from domain.enums import OrderStatus
from domain.errors import NotFoundError
from services import product_service

logger = logging.getLogger(__name__)


async def get_order(db: AsyncSession, *, order_id: int) -> Order:
    order = await db.get(Order, order_id)
    if not order:
        raise NotFoundError("Order", order_id)
    return order


async def place_order(
    db: AsyncSession,
    *,
    client: User,
    items: list[dict],
) -> Order:
    """
    Create an order for `client`.

    items: [{product_id:int, quantity:int}] — repeated products are merged.
    Each line records the product's current price.
    """
    quantities: dict[int, int] = {}
    for item in items:
        quantities[item["product_id"]] = quantities.get(item["product_id"], 0) + item["quantity"]

    order = Order(client=client, status=OrderStatus.WAITING_PAYMENT.value)
    for product_id, quantity in quantities.items():
        product = await product_service.get_product(db, product_id=product_id)
        order.items.append(
            OrderItem(product=product, quantity=quantity, price=product.price)
        )

    db.add(order)
    await db.flush()
    logger.info(f"Order {order.id} placed by user {client.id} ({len(order.items)} item(s))")
    return order


def order_total(order: Order) -> float:
    return sum(item.sub_total for item in order.items)
