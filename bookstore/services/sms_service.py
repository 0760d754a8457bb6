import logging
from typing import Optional

from bookstore.config import settings

logger = logging.getLogger(__name__)


def send_whatsapp_message(to: str, message: str) -> bool:
    # Placeholder until a WhatsApp/SMS provider is wired in.
    logger.info(f"[WhatsApp/SMS Placeholder] Sending to {to}: {message[:50]}...")
    return True


def send_admin_alert(message: str, number: Optional[str] = None) -> bool:
    """Send an alert message to the admin via WhatsApp/SMS."""
    number = number or settings.admin_alert_number
    if not number:
        logger.warning("Admin alert number not configured. Cannot send order alert.")
        return False

    return send_whatsapp_message(number, message)
