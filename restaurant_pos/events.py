"""
Order events for kitchen displays and other downstream consumers.

Every write that changes what the kitchen should show (new order, status
change, settled bill) is followed by an event on Kafka. The database row is
the source of truth: a failed publish is logged and counted, never surfaced
to the caller, and consumers re-read state on the next event.
"""

import logging
from datetime import datetime
from decimal import Decimal

from aiokafka import AIOKafkaProducer
from opentelemetry.propagate import inject
from pydantic import BaseModel, Field

from restaurant_pos.metrics import EVENTS_PUBLISHED

logger = logging.getLogger(__name__)

ORDER_PLACED = "order.placed"
ORDER_STATUS_CHANGED = "order.status_changed"
ORDER_PAID = "order.paid"


class EventBase(BaseModel):
    event_version: int = 1
    correlation_id: str  # carries X-Request-ID from the HTTP layer
    occurred_at: datetime = Field(default_factory=datetime.utcnow)

    model_config = {"extra": "ignore"}


class OrderLineEvent(BaseModel):
    menu_item_id: int
    name: str
    quantity: int


class OrderPlacedEvent(EventBase):
    order_id: int
    table_id: int
    table_name: str
    total: Decimal
    items: list[OrderLineEvent]


class OrderStatusChangedEvent(EventBase):
    order_id: int
    table_id: int
    previous_status: str
    status: str


class OrderPaidEvent(EventBase):
    order_id: int
    table_id: int
    payment_method: str
    amount: Decimal


class EventPublisher:
    """Thin wrapper over an AIOKafkaProducer; ``producer=None`` means publishing is switched off."""

    def __init__(self, producer: AIOKafkaProducer | None = None):
        self._producer = producer

    @property
    def enabled(self) -> bool:
        return self._producer is not None

    async def publish(self, topic: str, key: int, event: EventBase) -> bool:
        if self._producer is None:
            logger.debug("Kafka disabled, dropping event", extra={"topic": topic, "key": key})
            EVENTS_PUBLISHED.labels(topic, "disabled").inc()
            return False

        # Propagate trace context so consumers can join the request's trace
        outgoing_headers: dict[str, str] = {}
        inject(outgoing_headers)
        kafka_headers = [(k, v.encode()) for k, v in outgoing_headers.items()]

        try:
            await self._producer.send_and_wait(
                topic,
                key=str(key).encode(),
                value=event.model_dump_json().encode(),
                headers=kafka_headers,
            )
        except Exception as exc:
            logger.error(
                "Failed to publish event",
                extra={
                    "topic": topic,
                    "key": key,
                    "correlation_id": event.correlation_id,
                    "error": str(exc),
                },
            )
            EVENTS_PUBLISHED.labels(topic, "failed").inc()
            return False

        logger.info(
            "Published event",
            extra={"topic": topic, "key": key, "correlation_id": event.correlation_id},
        )
        EVENTS_PUBLISHED.labels(topic, "sent").inc()
        return True
