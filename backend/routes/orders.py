"""
Order endpoints.

  GET  /orders/{id}  — owner or ADMIN
  POST /orders       — CLIENT only; prices are snapshotted from the catalog
"""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db, transactional
from db_models import Order
from deps import require
from domain.enums import Operation
from domain.policy import Principal, ensure_self_or_admin
from domain.responses import StandardErrorResponse
from models import OrderRequest, OrderResponse
from services import auth_service, order_service
from utils.validators import require_valid_order

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/orders", tags=["orders"])

_error_responses = {
    401: {"model": StandardErrorResponse},
    403: {"model": StandardErrorResponse},
    404: {"model": StandardErrorResponse},
    422: {"model": StandardErrorResponse},
}


def _to_response(order: Order) -> OrderResponse:
    return OrderResponse(
        id=order.id,
        moment=order.moment,
        status=order.status,
        client={"id": order.client.id, "name": order.client.name},
        items=[
            {
                "productId": item.product_id,
                "name": item.product.name,
                "price": item.price,
                "quantity": item.quantity,
                "imgUrl": item.product.img_url,
                "subTotal": item.sub_total,
            }
            for item in order.items
        ],
        total=order_service.order_total(order),
    )


@router.get("/{order_id}", response_model=OrderResponse, responses=_error_responses)
async def get_order(
    order_id: int,
    principal: Principal = Depends(require(Operation.READ_ORDER)),
    db: AsyncSession = Depends(get_db),
):
    order = await order_service.get_order(db, order_id=order_id)
    ensure_self_or_admin(principal, order.client_id)
    return _to_response(order)


@router.post(
    "",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_error_responses,
)
async def place_order(
    request: OrderRequest,
    response: Response,
    principal: Principal = Depends(require(Operation.PLACE_ORDER)),
    db: AsyncSession = Depends(get_db),
):
    require_valid_order(request)

    async with transactional(db):
        client = await auth_service.get_user(db, principal.user_id)
        order = await order_service.place_order(
            db,
            client=client,
            items=[{"product_id": i.product_id, "quantity": i.quantity} for i in request.items],
        )

    response.headers["Location"] = f"/orders/{order.id}"
    return _to_response(order)
