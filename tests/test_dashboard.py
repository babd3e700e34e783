"""Tests for the admin dashboard aggregations."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from restaurant_pos.analytics.dashboard import (
    CategoryRecord,
    OrderLineRecord,
    OrderRecord,
    PaymentRecord,
    calculate_stats,
    category_revenue,
    daily_revenue,
    digital_payment_share,
    monthly_revenue,
    order_status_breakdown,
    payment_breakdown,
    top_selling_items,
    weekly_revenue,
    yearly_revenue,
)

TODAY = date(2024, 5, 15)  # a Wednesday


@pytest.fixture
def orders():
    return [
        OrderRecord(1, 1, "paid", Decimal("100.00"), datetime(2024, 5, 15, 12, 0)),
        OrderRecord(2, 2, "paid", Decimal("200.00"), datetime(2024, 5, 14, 20, 30)),
        OrderRecord(3, 1, "pending", Decimal("50.00"), datetime(2024, 5, 15, 13, 0)),
        OrderRecord(4, 3, "cancelled", Decimal("75.00"), datetime(2024, 5, 1, 9, 0)),
        OrderRecord(5, 3, "paid", Decimal("80.00"), datetime(2023, 11, 2, 19, 0)),
    ]


class TestStats:
    def test_revenue_counts_paid_orders_only(self, orders):
        stats = calculate_stats(orders)
        assert stats.total_revenue == Decimal("380.00")
        assert stats.total_orders == 5
        assert stats.total_customers == 3
        assert stats.average_bill == Decimal("126.67")

    def test_empty(self):
        stats = calculate_stats([])
        assert stats.total_revenue == 0
        assert stats.average_bill == 0


class TestRevenueSeries:
    def test_daily_last_seven_days(self, orders):
        points = daily_revenue(orders, TODAY)
        assert len(points) == 7
        assert points[-1].name == "Wed"
        assert points[-1].value == Decimal("100.00")
        assert points[-2].name == "Tue"
        assert points[-2].value == Decimal("200.00")
        assert points[0].value == 0

    def test_weekly_windows(self, orders):
        points = weekly_revenue(orders, TODAY)
        assert [p.name for p in points] == ["Week 1", "Week 2", "Week 3", "Week 4"]
        assert points[-1].value == Decimal("300.00")
        assert points[0].value == 0

    def test_monthly_last_twelve_months(self, orders):
        points = monthly_revenue(orders, TODAY)
        assert len(points) == 12
        assert points[0].name == "Jun"
        assert points[-1].name == "May"
        assert points[-1].value == Decimal("300.00")
        nov = points[5]
        assert nov.name == "Nov"
        assert nov.value == Decimal("80.00")

    def test_yearly(self, orders):
        points = yearly_revenue(orders, TODAY)
        assert [p.name for p in points] == ["2020", "2021", "2022", "2023", "2024"]
        assert points[-1].value == Decimal("300.00")
        assert points[-2].value == Decimal("80.00")


class TestBreakdowns:
    def test_top_selling_items(self):
        lines = [
            OrderLineRecord("Filter Coffee", 1, 3, Decimal("90.00"), "paid"),
            OrderLineRecord("Paneer Roll", 2, 1, Decimal("180.00"), "paid"),
            OrderLineRecord("Filter Coffee", 1, 2, Decimal("90.00"), "paid"),
            OrderLineRecord("Gulab Jamun", 4, 9, Decimal("80.00"), "cancelled"),
            OrderLineRecord(None, None, 1, Decimal("10.00"), "paid"),
        ]
        top = top_selling_items(lines)
        assert top[0].name == "Filter Coffee"
        assert top[0].quantity == 5
        assert {i.name for i in top} == {"Filter Coffee", "Paneer Roll", "Unknown Item"}

    def test_category_revenue_skips_empty_categories(self):
        categories = [CategoryRecord(1, "Beverages"), CategoryRecord(2, "Snacks")]
        lines = [
            OrderLineRecord("Filter Coffee", 1, 2, Decimal("90.00"), "paid"),
            OrderLineRecord("Paneer Roll", 2, 1, Decimal("180.00"), "pending"),
        ]
        points = category_revenue(lines, categories)
        assert len(points) == 1
        assert points[0].name == "Beverages"
        assert points[0].value == Decimal("180.00")

    def test_payment_breakdown_completed_only(self):
        payments = [
            PaymentRecord("cash", Decimal("100.00"), "completed"),
            PaymentRecord("upi", Decimal("50.00"), "completed"),
            PaymentRecord("cash", Decimal("25.00"), "completed"),
            PaymentRecord("card", Decimal("999.00"), "failed"),
        ]
        points = {p.name: p.value for p in payment_breakdown(payments)}
        assert points == {"CASH": Decimal("125.00"), "UPI": Decimal("50.00")}

    def test_order_status_breakdown_omits_zero_counts(self, orders):
        assert order_status_breakdown(orders) == {"paid": 3, "pending": 1, "cancelled": 1}
        assert order_status_breakdown(orders[:2]) == {"paid": 2}

    def test_digital_payment_share(self):
        payments = [
            PaymentRecord("upi", Decimal("60.00"), "completed"),
            PaymentRecord("qr", Decimal("40.00"), "completed"),
            PaymentRecord("cash", Decimal("100.00"), "completed"),
        ]
        assert digital_payment_share(payments, Decimal("200.00")) == pytest.approx(50.0)
        assert digital_payment_share(payments, Decimal("0")) == 0.0
