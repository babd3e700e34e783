import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_pos.database import get_db
from restaurant_pos.events import EventPublisher
from restaurant_pos.models.order import OrderStatus
from restaurant_pos.routers.deps import get_publisher, request_id, to_http_error
from restaurant_pos.schemas.order import OrderCreate, OrderItemsReplace, OrderResponse
from restaurant_pos.services import order_service
from restaurant_pos.services.errors import POSError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=list[OrderResponse])
async def list_orders(
    order_status: OrderStatus | None = Query(default=None, alias="status"),
    db: AsyncSession = Depends(get_db),
) -> list[OrderResponse]:
    return await order_service.list_orders(db, order_status)


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def place_order(
    body: OrderCreate,
    request: Request,
    db: AsyncSession = Depends(get_db),
    publisher: EventPublisher = Depends(get_publisher),
) -> OrderResponse:
    rid = request_id(request)
    logger.info(
        "Received place_order request",
        extra={"request_id": rid, "table_id": body.table_id},
    )
    try:
        return await order_service.create_order(db, body, rid, publisher)
    except (POSError, ValueError) as exc:
        raise to_http_error(exc)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: int,
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> OrderResponse:
    logger.info(
        "Received get_order request",
        extra={"request_id": request_id(request), "order_id": order_id},
    )
    order = await order_service.get_order(db, order_id)
    if order is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
    return order


@router.put("/{order_id}/items", response_model=OrderResponse)
async def replace_order_items(
    order_id: int,
    body: OrderItemsReplace,
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> OrderResponse:
    try:
        return await order_service.replace_order_items(db, order_id, body.items, request_id(request))
    except (POSError, ValueError) as exc:
        raise to_http_error(exc)


@router.post("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(
    order_id: int,
    request: Request,
    db: AsyncSession = Depends(get_db),
    publisher: EventPublisher = Depends(get_publisher),
) -> OrderResponse:
    try:
        return await order_service.cancel_order(db, order_id, request_id(request), publisher)
    except POSError as exc:
        raise to_http_error(exc)
