"""
Admin dashboard aggregations.

Plain filter/reduce over records loaded from the database. Revenue always
counts paid orders only; order counts and customer counts use every order.
"""

from collections import Counter, defaultdict
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal

PAID = "paid"
COMPLETED = "completed"
DIGITAL_METHODS = ("upi", "qr")
ZERO = Decimal("0.00")


@dataclass(frozen=True)
class OrderRecord:
    id: int
    table_id: int
    status: str
    total: Decimal
    created_at: datetime


@dataclass(frozen=True)
class OrderLineRecord:
    item_name: str | None
    category_id: int | None
    quantity: int
    price: Decimal
    order_status: str


@dataclass(frozen=True)
class PaymentRecord:
    method: str | None
    amount: Decimal
    status: str


@dataclass(frozen=True)
class CategoryRecord:
    id: int
    name: str


@dataclass
class DashboardStats:
    total_revenue: Decimal
    total_orders: int
    total_customers: int
    average_bill: Decimal


@dataclass
class SeriesPoint:
    name: str
    value: Decimal


@dataclass
class ItemQuantity:
    name: str
    quantity: int


def _paid(orders: list[OrderRecord]) -> list[OrderRecord]:
    return [order for order in orders if order.status == PAID]


def _revenue(orders: list[OrderRecord]) -> Decimal:
    return sum((order.total for order in orders), ZERO)


def calculate_stats(orders: list[OrderRecord]) -> DashboardStats:
    paid = _paid(orders)
    total_revenue = _revenue(paid)
    average_bill = (total_revenue / len(paid)).quantize(Decimal("0.01")) if paid else ZERO
    return DashboardStats(
        total_revenue=total_revenue,
        total_orders=len(orders),
        total_customers=len({order.table_id for order in orders}),
        average_bill=average_bill,
    )


# ---------------------------------------------------------------------------
# Revenue series
# ---------------------------------------------------------------------------


def daily_revenue(orders: list[OrderRecord], today: date) -> list[SeriesPoint]:
    """Last 7 days, oldest first, labelled by weekday."""
    paid = _paid(orders)
    points = []
    for offset in range(6, -1, -1):
        day = today - timedelta(days=offset)
        revenue = _revenue([o for o in paid if o.created_at.date() == day])
        points.append(SeriesPoint(name=day.strftime("%a"), value=revenue))
    return points


def weekly_revenue(orders: list[OrderRecord], today: date) -> list[SeriesPoint]:
    """Four consecutive 7-day windows, the last one ending today."""
    paid = _paid(orders)
    points = []
    for index in range(4):
        end = today - timedelta(days=(3 - index) * 7)
        start = end - timedelta(days=6)
        revenue = _revenue([o for o in paid if start <= o.created_at.date() <= end])
        points.append(SeriesPoint(name=f"Week {index + 1}", value=revenue))
    return points


def _months_back(today: date, count: int) -> tuple[int, int]:
    month_index = today.year * 12 + (today.month - 1) - count
    return month_index // 12, month_index % 12 + 1


def monthly_revenue(orders: list[OrderRecord], today: date) -> list[SeriesPoint]:
    """Last 12 calendar months including the current one."""
    paid = _paid(orders)
    points = []
    for back in range(11, -1, -1):
        year, month = _months_back(today, back)
        revenue = _revenue(
            [o for o in paid if o.created_at.year == year and o.created_at.month == month]
        )
        points.append(SeriesPoint(name=date(year, month, 1).strftime("%b"), value=revenue))
    return points


def yearly_revenue(orders: list[OrderRecord], today: date) -> list[SeriesPoint]:
    paid = _paid(orders)
    points = []
    for year in range(today.year - 4, today.year + 1):
        revenue = _revenue([o for o in paid if o.created_at.year == year])
        points.append(SeriesPoint(name=str(year), value=revenue))
    return points


# ---------------------------------------------------------------------------
# Menu and payment breakdowns
# ---------------------------------------------------------------------------


def top_selling_items(lines: list[OrderLineRecord], limit: int = 5) -> list[ItemQuantity]:
    quantities: Counter[str] = Counter()
    for line in lines:
        if line.order_status == PAID:
            quantities[line.item_name or "Unknown Item"] += line.quantity
    return [ItemQuantity(name=name, quantity=qty) for name, qty in quantities.most_common(limit)]


def category_revenue(
    lines: list[OrderLineRecord], categories: list[CategoryRecord]
) -> list[SeriesPoint]:
    by_category: dict[int, Decimal] = defaultdict(lambda: ZERO)
    for line in lines:
        if line.order_status == PAID and line.category_id is not None:
            by_category[line.category_id] += line.price * line.quantity

    points = []
    for category in categories:
        revenue = by_category.get(category.id, ZERO)
        if revenue > 0:
            points.append(SeriesPoint(name=category.name, value=revenue))
    return points


def payment_breakdown(payments: list[PaymentRecord]) -> list[SeriesPoint]:
    by_method: dict[str, Decimal] = {}
    for payment in payments:
        if payment.status != COMPLETED:
            continue
        method = payment.method or "unknown"
        by_method[method] = by_method.get(method, ZERO) + payment.amount
    return [SeriesPoint(name=method.upper(), value=amount) for method, amount in by_method.items()]


def order_status_breakdown(orders: list[OrderRecord]) -> dict[str, int]:
    counts = Counter(order.status for order in orders)
    breakdown = {
        "paid": counts.get("paid", 0),
        "pending": counts.get("pending", 0),
        "cancelled": counts.get("cancelled", 0),
    }
    return {status: count for status, count in breakdown.items() if count > 0}


def digital_payment_share(payments: list[PaymentRecord], total_revenue: Decimal) -> float:
    """Percentage of revenue collected through UPI or QR."""
    if total_revenue <= 0:
        return 0.0
    digital = sum(
        (p.amount for p in payments if p.method in DIGITAL_METHODS),
        ZERO,
    )
    return float(digital / total_revenue * 100)
