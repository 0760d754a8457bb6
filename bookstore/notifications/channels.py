from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from bookstore.config import settings
from bookstore.services import email_service, sms_service


class Channel(str, Enum):
    EMAIL_CUSTOMER = "email_customer"
    EMAIL_ADMIN = "email_admin"
    ALERT_ADMIN = "alert_admin"


@dataclass
class NotificationContent:
    subject: str
    body: str


class NotificationChannel(ABC):
    """One way of reaching a recipient. ``send`` reports delivery as a bool."""

    @abstractmethod
    def send(self, recipient: Optional[str], content: NotificationContent) -> bool:
        ...


class EmailChannel(NotificationChannel):
    def send(self, recipient, content):
        return email_service.send_email(
            to=recipient,
            subject=content.subject,
            html=content.body,
        )


class AdminEmailChannel(NotificationChannel):
    def send(self, recipient, content):
        return email_service.send_email(
            to=recipient or settings.admin_emails,
            subject=content.subject,
            html=content.body,
        )


class AdminAlertChannel(NotificationChannel):
    # recipient falls back to the configured admin number
    def send(self, recipient, content):
        return sms_service.send_admin_alert(content.body, number=recipient)
