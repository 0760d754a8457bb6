import logging
from typing import Dict, Optional

from bookstore.notifications.channels import (
    AdminAlertChannel,
    AdminEmailChannel,
    Channel,
    EmailChannel,
    NotificationChannel,
    NotificationContent,
)
from bookstore.notifications.events import OrderEvent
from bookstore.notifications.rules import NOTIFICATION_RULES

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """
    Central notification dispatcher.

    Sends an event's content over every channel its rule lists. Delivery is
    fire-and-forget: a failing channel is logged and skipped, never raised
    to the operation that triggered it, and never retried here.
    """

    def __init__(self, channels: Dict[Channel, NotificationChannel]):
        self.channels = channels

    def dispatch(
        self,
        event: OrderEvent,
        recipient: Optional[str],
        content: NotificationContent,
    ) -> int:
        """Returns how many channels reported a successful send."""
        delivered = 0

        for channel in NOTIFICATION_RULES.get(event, []):
            sender = self.channels.get(channel)
            if sender is None:
                logger.warning(f"No sender configured for {channel.value}, skipping {event.value}")
                continue

            try:
                ok = sender.send(recipient, content)
            except Exception:
                logger.exception(f"{channel.value} notification failed for {event.value}")
                continue

            if ok:
                delivered += 1
                logger.info(f"{event.value} sent via {channel.value}")
            else:
                logger.warning(f"{channel.value} rejected {event.value} for {recipient}")

        return delivered


_default_dispatcher: Optional[NotificationDispatcher] = None


def get_dispatcher() -> NotificationDispatcher:
    global _default_dispatcher
    if _default_dispatcher is None:
        _default_dispatcher = NotificationDispatcher({
            Channel.EMAIL_CUSTOMER: EmailChannel(),
            Channel.ALERT_ADMIN: AdminAlertChannel(),
            Channel.EMAIL_ADMIN: AdminEmailChannel(),
        })
    return _default_dispatcher
