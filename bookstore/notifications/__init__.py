from .events import OrderEvent
from .channels import Channel, NotificationChannel, NotificationContent
from .dispatcher import NotificationDispatcher, get_dispatcher

__all__ = [
    "OrderEvent",
    "Channel",
    "NotificationChannel",
    "NotificationContent",
    "NotificationDispatcher",
    "get_dispatcher",
]
