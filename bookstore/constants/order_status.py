from enum import Enum


class OrderStatus(str, Enum):
    pending = "pending"
    processing = "processing"
    shipped = "shipped"
    delivered = "delivered"
    cancelled = "cancelled"


INITIAL_STATUS = OrderStatus.pending

# Normal forward path, shown to admins as "next step" hints.
ALLOWED_TRANSITIONS = {
    OrderStatus.pending: [OrderStatus.processing, OrderStatus.cancelled],
    OrderStatus.processing: [OrderStatus.shipped, OrderStatus.cancelled],
    OrderStatus.shipped: [OrderStatus.delivered, OrderStatus.cancelled],
    OrderStatus.delivered: [],
    OrderStatus.cancelled: [],
}

# Landing in one of these sends the customer a status update email.
CUSTOMER_NOTIFY_STATUSES = {
    OrderStatus.processing,
    OrderStatus.shipped,
    OrderStatus.delivered,
    OrderStatus.cancelled,
}


def parse_status(value) -> OrderStatus | None:
    try:
        return OrderStatus(value)
    except ValueError:
        return None
