from prometheus_client import Counter

ORDERS_PLACED = Counter(
    "pos_orders_placed_total",
    "Orders sent to the kitchen",
)

KITCHEN_TRANSITIONS = Counter(
    "pos_kitchen_transitions_total",
    "Order status changes made from the kitchen display",
    ["status"],  # pending | preparing | ready | served | cancelled
)

PAYMENTS_SETTLED = Counter(
    "pos_payments_settled_total",
    "Bills settled at the counter",
    ["method"],  # cash | card | upi | qr
)

EVENTS_PUBLISHED = Counter(
    "pos_events_published_total",
    "Order events handed to Kafka",
    ["topic", "outcome"],  # outcome: sent | failed | disabled
)
