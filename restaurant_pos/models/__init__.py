# Import all models here so SQLAlchemy registers them with Base.metadata
from restaurant_pos.models.menu import MenuCategory, MenuItem
from restaurant_pos.models.order import (
    CLOSED_STATUSES,
    KITCHEN_STATUSES,
    Order,
    OrderItem,
    OrderStatus,
)
from restaurant_pos.models.payment import Payment, PaymentMethod, PaymentStatus
from restaurant_pos.models.restaurant_settings import RestaurantSettings
from restaurant_pos.models.table import DiningTable, TableStatus

__all__ = [
    "CLOSED_STATUSES",
    "DiningTable",
    "KITCHEN_STATUSES",
    "MenuCategory",
    "MenuItem",
    "Order",
    "OrderItem",
    "OrderStatus",
    "Payment",
    "PaymentMethod",
    "PaymentStatus",
    "RestaurantSettings",
    "TableStatus",
]
