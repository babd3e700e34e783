import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_pos.database import get_db
from restaurant_pos.events import EventPublisher
from restaurant_pos.routers.deps import get_publisher, request_id, to_http_error
from restaurant_pos.schemas.order import KitchenBoard, OrderResponse, OrderStatusUpdate
from restaurant_pos.services import order_service
from restaurant_pos.services.errors import POSError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=KitchenBoard)
async def kitchen_board(db: AsyncSession = Depends(get_db)) -> KitchenBoard:
    return await order_service.kitchen_board(db)


@router.patch("/orders/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: int,
    body: OrderStatusUpdate,
    request: Request,
    db: AsyncSession = Depends(get_db),
    publisher: EventPublisher = Depends(get_publisher),
) -> OrderResponse:
    rid = request_id(request)
    logger.info(
        "Received kitchen status update",
        extra={"request_id": rid, "order_id": order_id, "status": body.status.value},
    )
    try:
        return await order_service.update_order_status(db, order_id, body.status, rid, publisher)
    except (POSError, ValueError) as exc:
        raise to_http_error(exc)
