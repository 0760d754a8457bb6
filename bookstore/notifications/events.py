from enum import Enum


class OrderEvent(str, Enum):
    ORDER_PLACED = "order_placed"
    ORDER_PLACED_ADMIN = "order_placed_admin"
    STATUS_UPDATED = "status_updated"
