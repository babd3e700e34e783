import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_pos.database import get_db
from restaurant_pos.events import EventPublisher
from restaurant_pos.routers.deps import get_publisher, request_id, to_http_error
from restaurant_pos.schemas.order import BillPreview, SettleBillRequest, SettleBillResponse
from restaurant_pos.services import billing_service
from restaurant_pos.services.errors import POSError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/orders/{order_id}", response_model=BillPreview)
async def preview_bill(order_id: int, db: AsyncSession = Depends(get_db)) -> BillPreview:
    try:
        return await billing_service.preview_bill(db, order_id)
    except POSError as exc:
        raise to_http_error(exc)


@router.post("/orders/{order_id}/settle", response_model=SettleBillResponse)
async def settle_bill(
    order_id: int,
    body: SettleBillRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
    publisher: EventPublisher = Depends(get_publisher),
) -> SettleBillResponse:
    rid = request_id(request)
    logger.info(
        "Received settle_bill request",
        extra={
            "request_id": rid,
            "order_id": order_id,
            "payment_method": body.payment_method.value,
        },
    )
    try:
        return await billing_service.settle_bill(db, order_id, body, rid, publisher)
    except (POSError, ValueError) as exc:
        raise to_http_error(exc)
