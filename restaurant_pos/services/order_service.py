import logging
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from restaurant_pos.config import settings
from restaurant_pos.events import (
    ORDER_PLACED,
    ORDER_STATUS_CHANGED,
    EventPublisher,
    OrderLineEvent,
    OrderPlacedEvent,
    OrderStatusChangedEvent,
)
from restaurant_pos.metrics import KITCHEN_TRANSITIONS, ORDERS_PLACED
from restaurant_pos.models.menu import MenuItem
from restaurant_pos.models.order import KITCHEN_STATUSES, Order, OrderItem, OrderStatus
from restaurant_pos.models.table import DiningTable, TableStatus
from restaurant_pos.schemas.order import (
    KitchenBoard,
    KitchenTicket,
    OrderCreate,
    OrderItemCreate,
    OrderItemResponse,
    OrderResponse,
    PaymentResponse,
)
from restaurant_pos.services.errors import InvalidStateError, NotFoundError

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")

# Statuses the kitchen display may set; paid/cancelled go through billing and cancel_order.
KITCHEN_SETTABLE = (
    OrderStatus.PENDING,
    OrderStatus.PREPARING,
    OrderStatus.READY,
    OrderStatus.SERVED,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def calculate_totals(lines: list[tuple[Decimal, int]]) -> tuple[Decimal, Decimal, Decimal]:
    """Return (subtotal, tax, total) for (unit price, quantity) pairs."""
    subtotal = sum((price * quantity for price, quantity in lines), Decimal("0.00"))
    subtotal = subtotal.quantize(CENTS, rounding=ROUND_HALF_UP)
    tax = (subtotal * Decimal(str(settings.tax_rate))).quantize(CENTS, rounding=ROUND_HALF_UP)
    return subtotal, tax, subtotal + tax


def build_item_response(item: OrderItem) -> OrderItemResponse:
    return OrderItemResponse(
        id=item.id,
        menu_item_id=item.menu_item_id,
        menu_item_name=item.menu_item.name if item.menu_item else "Unknown Item",
        quantity=item.quantity,
        price=item.price,
        line_total=item.price * item.quantity,
        status=item.status,
    )


def build_response(order: Order) -> OrderResponse:
    return OrderResponse(
        id=order.id,
        table_id=order.table_id,
        table_name=order.table.name if order.table else "Unknown",
        status=order.status,
        subtotal=order.subtotal,
        tax=order.tax,
        total=order.total,
        created_at=order.created_at,
        updated_at=order.updated_at,
        items=[build_item_response(item) for item in order.items],
        payments=[PaymentResponse.model_validate(p) for p in order.payments],
    )


def _merge_lines(items: list[OrderItemCreate]) -> dict[int, int]:
    """Collapse repeated menu items into one line, keeping first-seen order."""
    merged: dict[int, int] = {}
    for item in items:
        merged[item.menu_item_id] = merged.get(item.menu_item_id, 0) + item.quantity
    return merged


async def _load_menu_items(db: AsyncSession, menu_item_ids: list[int]) -> dict[int, MenuItem]:
    result = await db.execute(
        select(MenuItem).where(
            MenuItem.id.in_(menu_item_ids),
            MenuItem.is_available.is_(True),
        )
    )
    menu_items = {m.id: m for m in result.scalars().all()}

    missing = set(menu_item_ids) - set(menu_items)
    if missing:
        raise ValueError(f"Menu items not found or unavailable: {sorted(missing)}")
    return menu_items


async def _build_lines(db: AsyncSession, items: list[OrderItemCreate]) -> list[OrderItem]:
    quantities = _merge_lines(items)
    menu_items = await _load_menu_items(db, list(quantities))
    return [
        OrderItem(
            menu_item_id=menu_item_id,
            menu_item=menu_items[menu_item_id],
            quantity=quantity,
            price=menu_items[menu_item_id].price,
            status=OrderStatus.PENDING,
        )
        for menu_item_id, quantity in quantities.items()
    ]


async def fetch_order(db: AsyncSession, order_id: int) -> Order | None:
    result = await db.execute(
        select(Order)
        .where(Order.id == order_id)
        .options(
            selectinload(Order.table),
            selectinload(Order.items).selectinload(OrderItem.menu_item),
            selectinload(Order.payments),
        )
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


async def require_open_order(db: AsyncSession, order_id: int) -> Order:
    order = await fetch_order(db, order_id)
    if order is None:
        raise NotFoundError(f"Order {order_id} not found")
    if not order.is_open:
        raise InvalidStateError(f"Order {order_id} is already {order.status.value}")
    return order


def release_table(order: Order) -> None:
    """Free the order's table if it is still held by this order."""
    table = order.table
    if table is not None and table.current_order_id == order.id:
        table.current_order_id = None
        table.status = TableStatus.AVAILABLE


def _set_status(order: Order, status: OrderStatus) -> None:
    order.status = status
    order.updated_at = datetime.utcnow()
    for item in order.items:
        item.status = status


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def get_order(db: AsyncSession, order_id: int) -> OrderResponse | None:
    order = await fetch_order(db, order_id)
    if order is None:
        return None
    return build_response(order)


async def list_orders(db: AsyncSession, status: OrderStatus | None = None) -> list[OrderResponse]:
    query = (
        select(Order)
        .options(
            selectinload(Order.table),
            selectinload(Order.items).selectinload(OrderItem.menu_item),
            selectinload(Order.payments),
        )
        .order_by(Order.created_at.desc(), Order.id.desc())
    )
    if status is not None:
        query = query.where(Order.status == status)
    result = await db.execute(query)
    return [build_response(order) for order in result.scalars().all()]


async def create_order(
    db: AsyncSession,
    order_data: OrderCreate,
    request_id: str,
    publisher: EventPublisher,
) -> OrderResponse:
    # 1. Table must exist and be free of any open order
    table = await db.get(DiningTable, order_data.table_id)
    if table is None:
        raise NotFoundError(f"Table {order_data.table_id} not found")
    if table.current_order_id is not None:
        raise InvalidStateError(
            f"Table {table.name!r} already has open order {table.current_order_id}"
        )

    # 2. Validate menu items and capture prices
    lines = await _build_lines(db, order_data.items)
    subtotal, tax, total = calculate_totals([(line.price, line.quantity) for line in lines])

    # 3. Persist order + items and seat the table
    order = Order(
        table_id=table.id,
        status=OrderStatus.PENDING,
        subtotal=subtotal,
        tax=tax,
        total=total,
        items=lines,
    )
    db.add(order)
    await db.flush()  # obtain order.id before linking the table

    table.current_order_id = order.id
    table.status = TableStatus.OCCUPIED
    await db.commit()

    ORDERS_PLACED.inc()
    logger.info(
        "Order sent to kitchen",
        extra={
            "order_id": order.id,
            "table_id": table.id,
            "request_id": request_id,
            "total": float(total),
            "item_count": len(lines),
        },
    )

    # 4. Notify kitchen displays
    await publisher.publish(
        ORDER_PLACED,
        key=order.id,
        event=OrderPlacedEvent(
            correlation_id=request_id,
            order_id=order.id,
            table_id=table.id,
            table_name=table.name,
            total=total,
            items=[
                OrderLineEvent(
                    menu_item_id=line.menu_item_id,
                    name=line.menu_item.name,
                    quantity=line.quantity,
                )
                for line in lines
            ],
        ),
    )

    order = await fetch_order(db, order.id)
    return build_response(order)


async def replace_order_items(
    db: AsyncSession,
    order_id: int,
    items: list[OrderItemCreate],
    request_id: str,
) -> OrderResponse:
    """Replace an open order's lines (the cart was edited) and recompute its totals."""
    order = await require_open_order(db, order_id)
    lines = await _build_lines(db, items)
    for line in lines:
        line.status = order.status

    order.items.clear()
    order.items.extend(lines)
    order.subtotal, order.tax, order.total = calculate_totals(
        [(line.price, line.quantity) for line in lines]
    )
    order.updated_at = datetime.utcnow()
    await db.commit()

    logger.info(
        "Order items replaced",
        extra={
            "order_id": order_id,
            "request_id": request_id,
            "total": float(order.total),
            "item_count": len(lines),
        },
    )
    order = await fetch_order(db, order_id)
    return build_response(order)


async def update_order_status(
    db: AsyncSession,
    order_id: int,
    status: OrderStatus,
    request_id: str,
    publisher: EventPublisher,
) -> OrderResponse:
    """Kitchen status change; the order's items follow the order."""
    if status not in KITCHEN_SETTABLE:
        raise ValueError(
            f"Kitchen can only set {[s.value for s in KITCHEN_SETTABLE]}, got {status.value!r}"
        )

    order = await require_open_order(db, order_id)
    previous = order.status
    _set_status(order, status)
    await db.commit()

    KITCHEN_TRANSITIONS.labels(status.value).inc()
    logger.info(
        "Order status changed",
        extra={
            "order_id": order_id,
            "request_id": request_id,
            "from": previous.value,
            "to": status.value,
        },
    )

    await publisher.publish(
        ORDER_STATUS_CHANGED,
        key=order_id,
        event=OrderStatusChangedEvent(
            correlation_id=request_id,
            order_id=order_id,
            table_id=order.table_id,
            previous_status=previous.value,
            status=status.value,
        ),
    )

    order = await fetch_order(db, order_id)
    return build_response(order)


async def cancel_order(
    db: AsyncSession,
    order_id: int,
    request_id: str,
    publisher: EventPublisher,
) -> OrderResponse:
    order = await require_open_order(db, order_id)
    previous = order.status
    _set_status(order, OrderStatus.CANCELLED)
    release_table(order)
    await db.commit()

    KITCHEN_TRANSITIONS.labels(OrderStatus.CANCELLED.value).inc()
    logger.info(
        "Order cancelled",
        extra={"order_id": order_id, "request_id": request_id, "from": previous.value},
    )

    await publisher.publish(
        ORDER_STATUS_CHANGED,
        key=order_id,
        event=OrderStatusChangedEvent(
            correlation_id=request_id,
            order_id=order_id,
            table_id=order.table_id,
            previous_status=previous.value,
            status=OrderStatus.CANCELLED.value,
        ),
    )

    order = await fetch_order(db, order_id)
    return build_response(order)


async def kitchen_board(db: AsyncSession, now: datetime | None = None) -> KitchenBoard:
    """Open kitchen orders, oldest first, grouped into pending/preparing/ready columns."""
    now = now or datetime.utcnow()
    result = await db.execute(
        select(Order)
        .where(Order.status.in_(KITCHEN_STATUSES))
        .options(
            selectinload(Order.table),
            selectinload(Order.items).selectinload(OrderItem.menu_item),
            selectinload(Order.payments),
        )
        .order_by(Order.created_at.asc(), Order.id.asc())
    )

    columns: dict[OrderStatus, list[KitchenTicket]] = {status: [] for status in KITCHEN_STATUSES}
    for order in result.scalars().all():
        elapsed = max(int((now - order.created_at).total_seconds() // 60), 0)
        columns[order.status].append(
            KitchenTicket(order=build_response(order), elapsed_minutes=elapsed)
        )

    return KitchenBoard(
        pending=columns[OrderStatus.PENDING],
        preparing=columns[OrderStatus.PREPARING],
        ready=columns[OrderStatus.READY],
    )
