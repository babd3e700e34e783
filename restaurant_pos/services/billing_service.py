"""
Counter billing: preview the bill for an open order and settle it.

Cash payments must cover the total and return change; card, UPI and QR are
charged the exact total. Settling records a completed payment, marks the
order paid and frees its table in one transaction.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_pos.config import settings
from restaurant_pos.events import ORDER_PAID, EventPublisher, OrderPaidEvent
from restaurant_pos.metrics import PAYMENTS_SETTLED
from restaurant_pos.models.order import OrderStatus
from restaurant_pos.models.payment import Payment, PaymentMethod, PaymentStatus
from restaurant_pos.schemas.order import (
    BillPreview,
    PaymentResponse,
    SettleBillRequest,
    SettleBillResponse,
)
from restaurant_pos.services import order_service

logger = logging.getLogger(__name__)


def calculate_change(
    total: Decimal, method: PaymentMethod, amount_received: Decimal | None
) -> tuple[Decimal, Decimal]:
    """Return (amount received, change due) for a bill of ``total``."""
    if method != PaymentMethod.CASH:
        return total, Decimal("0.00")

    received = total if amount_received is None else amount_received
    # Stored as Numeric(10, 2); round here so the receipt matches the payment row
    received = received.quantize(order_service.CENTS, rounding=ROUND_HALF_UP)
    if received < total:
        raise ValueError(f"Insufficient amount: received {received}, bill total is {total}")
    return received, received - total


async def preview_bill(db: AsyncSession, order_id: int) -> BillPreview:
    order = await order_service.require_open_order(db, order_id)
    response = order_service.build_response(order)
    return BillPreview(
        order_id=order.id,
        table_name=response.table_name,
        items=response.items,
        subtotal=order.subtotal,
        tax_rate=settings.tax_rate,
        tax=order.tax,
        total=order.total,
        currency=settings.currency,
    )


async def settle_bill(
    db: AsyncSession,
    order_id: int,
    request: SettleBillRequest,
    request_id: str,
    publisher: EventPublisher,
) -> SettleBillResponse:
    order = await order_service.require_open_order(db, order_id)
    amount_received, change_due = calculate_change(
        order.total, request.payment_method, request.amount_received
    )

    payment = Payment(
        order_id=order.id,
        payment_method=request.payment_method,
        amount=order.total,
        amount_received=amount_received,
        change_due=change_due,
        status=PaymentStatus.COMPLETED,
    )
    db.add(payment)

    order.status = OrderStatus.PAID
    for item in order.items:
        item.status = OrderStatus.PAID
    order_service.release_table(order)
    await db.commit()  # payment, order status and table release land together

    PAYMENTS_SETTLED.labels(request.payment_method.value).inc()
    logger.info(
        "Bill settled",
        extra={
            "order_id": order.id,
            "request_id": request_id,
            "payment_method": request.payment_method.value,
            "amount": float(order.total),
            "change_due": float(change_due),
        },
    )

    await publisher.publish(
        ORDER_PAID,
        key=order.id,
        event=OrderPaidEvent(
            correlation_id=request_id,
            order_id=order.id,
            table_id=order.table_id,
            payment_method=request.payment_method.value,
            amount=order.total,
        ),
    )

    refreshed = await order_service.fetch_order(db, order.id)
    return SettleBillResponse(
        order=order_service.build_response(refreshed),
        payment=PaymentResponse.model_validate(payment),
        change_due=change_due,
    )
