from bookstore.config import settings
from bookstore.notifications.channels import NotificationContent
from bookstore.utils.template import render_template


def order_confirmation(order, items) -> NotificationContent:
    return NotificationContent(
        subject=f"Order #{order.id} Confirmed!",
        body=render_template(
            "emails/order_confirmation.html",
            order=order,
            items=items,
            currency=settings.currency,
            store_name=settings.store_name,
        ),
    )


def admin_order_alert(order, items) -> NotificationContent:
    return NotificationContent(
        subject=f"New order #{order.id}",
        body=render_template(
            "emails/admin_order_alert.txt",
            order=order,
            items=items,
            currency=settings.currency,
        ),
    )


def status_update(order) -> NotificationContent:
    return NotificationContent(
        subject=f"Update: Your Order #{order.id} is now {order.status.upper()}",
        body=render_template(
            "emails/status_update.html",
            order=order,
            store_name=settings.store_name,
        ),
    )
