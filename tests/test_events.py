"""Tests for the Kafka event publisher."""

import asyncio
import json

from restaurant_pos.events import ORDER_STATUS_CHANGED, EventPublisher, OrderStatusChangedEvent


class RecordingProducer:
    def __init__(self, fail=False):
        self.fail = fail
        self.sent = []

    async def send_and_wait(self, topic, key=None, value=None, headers=None):
        if self.fail:
            raise ConnectionError("broker unavailable")
        self.sent.append((topic, key, value, headers))


def make_event():
    return OrderStatusChangedEvent(
        correlation_id="req-1",
        order_id=7,
        table_id=2,
        previous_status="pending",
        status="preparing",
    )


class TestEventPublisher:
    def test_disabled_publisher_drops_events(self):
        publisher = EventPublisher()
        assert publisher.enabled is False
        assert asyncio.run(publisher.publish(ORDER_STATUS_CHANGED, 7, make_event())) is False

    def test_publish_serialises_event(self):
        producer = RecordingProducer()
        publisher = EventPublisher(producer)

        assert asyncio.run(publisher.publish(ORDER_STATUS_CHANGED, 7, make_event())) is True

        topic, key, value, headers = producer.sent[0]
        assert topic == "order.status_changed"
        assert key == b"7"
        payload = json.loads(value)
        assert payload["order_id"] == 7
        assert payload["correlation_id"] == "req-1"
        assert payload["event_version"] == 1
        assert isinstance(headers, list)

    def test_publish_failure_is_not_raised(self):
        publisher = EventPublisher(RecordingProducer(fail=True))
        assert asyncio.run(publisher.publish(ORDER_STATUS_CHANGED, 7, make_event())) is False
