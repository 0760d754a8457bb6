from bookstore.notifications.events import OrderEvent
from bookstore.notifications.channels import Channel


NOTIFICATION_RULES = {
    OrderEvent.ORDER_PLACED: [Channel.EMAIL_CUSTOMER],
    OrderEvent.ORDER_PLACED_ADMIN: [Channel.ALERT_ADMIN, Channel.EMAIL_ADMIN],
    OrderEvent.STATUS_UPDATED: [Channel.EMAIL_CUSTOMER],
}
