import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from restaurant_pos.analytics import dashboard
from restaurant_pos.analytics.benchmarks import RestaurantType
from restaurant_pos.models.menu import MenuCategory, MenuItem
from restaurant_pos.models.order import Order, OrderItem
from restaurant_pos.models.payment import Payment
from restaurant_pos.schemas.analytics import (
    AdminOverview,
    DashboardStatsResponse,
    ItemQuantityResponse,
    RevenueSeries,
    SeriesPointResponse,
)
from restaurant_pos.services import settings_service
from restaurant_pos.services.errors import NotFoundError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


async def _load_orders(db: AsyncSession) -> list[dashboard.OrderRecord]:
    result = await db.execute(select(Order).order_by(Order.created_at.desc()))
    return [
        dashboard.OrderRecord(
            id=o.id,
            table_id=o.table_id,
            status=o.status.value,
            total=o.total,
            created_at=o.created_at,
        )
        for o in result.scalars().all()
    ]


async def _load_lines(db: AsyncSession) -> list[dashboard.OrderLineRecord]:
    result = await db.execute(
        select(OrderItem).options(
            selectinload(OrderItem.menu_item),
            selectinload(OrderItem.order),
        )
    )
    lines = []
    for item in result.scalars().all():
        menu_item: MenuItem | None = item.menu_item
        lines.append(
            dashboard.OrderLineRecord(
                item_name=menu_item.name if menu_item else None,
                category_id=menu_item.category_id if menu_item else None,
                quantity=item.quantity,
                price=item.price,
                order_status=item.order.status.value,
            )
        )
    return lines


async def _load_categories(db: AsyncSession) -> list[dashboard.CategoryRecord]:
    result = await db.execute(select(MenuCategory).order_by(MenuCategory.display_order))
    return [dashboard.CategoryRecord(id=c.id, name=c.name) for c in result.scalars().all()]


async def _load_payments(db: AsyncSession) -> list[dashboard.PaymentRecord]:
    result = await db.execute(select(Payment).order_by(Payment.created_at.desc()))
    return [
        dashboard.PaymentRecord(
            method=p.payment_method.value if p.payment_method else None,
            amount=p.amount,
            status=p.status.value,
        )
        for p in result.scalars().all()
    ]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def admin_overview(db: AsyncSession, now: datetime | None = None) -> AdminOverview:
    today = (now or datetime.utcnow()).date()
    orders = await _load_orders(db)
    lines = await _load_lines(db)
    categories = await _load_categories(db)
    payments = await _load_payments(db)

    stats = dashboard.calculate_stats(orders)

    def points(series: list[dashboard.SeriesPoint]) -> list[SeriesPointResponse]:
        return [SeriesPointResponse.model_validate(p) for p in series]

    overview = AdminOverview(
        stats=DashboardStatsResponse.model_validate(stats),
        revenue=RevenueSeries(
            daily=points(dashboard.daily_revenue(orders, today)),
            weekly=points(dashboard.weekly_revenue(orders, today)),
            monthly=points(dashboard.monthly_revenue(orders, today)),
            yearly=points(dashboard.yearly_revenue(orders, today)),
        ),
        top_selling_items=[
            ItemQuantityResponse.model_validate(i) for i in dashboard.top_selling_items(lines)
        ],
        category_revenue=points(dashboard.category_revenue(lines, categories)),
        payment_breakdown=points(dashboard.payment_breakdown(payments)),
        order_status_breakdown=dashboard.order_status_breakdown(orders),
        digital_payment_share=dashboard.digital_payment_share(payments, stats.total_revenue),
    )
    logger.info(
        "Admin overview computed",
        extra={"orders": len(orders), "payments": len(payments)},
    )
    return overview


async def resolve_restaurant_type(
    db: AsyncSession, requested: RestaurantType | None
) -> RestaurantType:
    """Use the requested type, else the configured one."""
    if requested is not None:
        return requested
    row = await settings_service.get_restaurant_settings(db)
    if row is None:
        raise NotFoundError("Restaurant type not configured; save restaurant settings first")
    return RestaurantType(row.restaurant_type)
