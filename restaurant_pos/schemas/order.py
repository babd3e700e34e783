from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from restaurant_pos.models.order import OrderStatus
from restaurant_pos.models.payment import PaymentMethod, PaymentStatus


class OrderItemCreate(BaseModel):
    menu_item_id: int
    quantity: int = Field(ge=1)


class OrderCreate(BaseModel):
    table_id: int
    items: list[OrderItemCreate] = Field(min_length=1)


class OrderItemsReplace(BaseModel):
    items: list[OrderItemCreate] = Field(min_length=1)


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class OrderItemResponse(BaseModel):
    id: int
    menu_item_id: int
    menu_item_name: str
    quantity: int
    price: Decimal
    line_total: Decimal
    status: OrderStatus


class PaymentResponse(BaseModel):
    id: int
    payment_method: PaymentMethod
    amount: Decimal
    amount_received: Decimal
    change_due: Decimal
    status: PaymentStatus
    created_at: datetime

    model_config = {"from_attributes": True}


class OrderResponse(BaseModel):
    id: int
    table_id: int
    table_name: str
    status: OrderStatus
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    created_at: datetime
    updated_at: datetime
    items: list[OrderItemResponse]
    payments: list[PaymentResponse]


class KitchenTicket(BaseModel):
    order: OrderResponse
    elapsed_minutes: int


class KitchenBoard(BaseModel):
    pending: list[KitchenTicket]
    preparing: list[KitchenTicket]
    ready: list[KitchenTicket]


class BillPreview(BaseModel):
    order_id: int
    table_name: str
    items: list[OrderItemResponse]
    subtotal: Decimal
    tax_rate: float
    tax: Decimal
    total: Decimal
    currency: str


class SettleBillRequest(BaseModel):
    payment_method: PaymentMethod
    # Only meaningful for cash; other methods are charged the exact total.
    amount_received: Decimal | None = Field(default=None, ge=0)


class SettleBillResponse(BaseModel):
    order: OrderResponse
    payment: PaymentResponse
    change_due: Decimal
