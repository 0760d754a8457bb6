import logging
from typing import Optional

from sqlmodel import Session

from bookstore.models.action_log import ActionLog, ActionType

logger = logging.getLogger(__name__)


def record_action(
    bind,
    user_id: Optional[int],
    action_type: ActionType,
    details: Optional[dict] = None,
) -> Optional[int]:
    """
    Append one entry to the action log.

    Runs in its own session so a failed write can never touch the caller's
    transaction; failures are logged and swallowed.
    """
    try:
        with Session(bind) as session:
            entry = ActionLog(
                user_id=user_id,
                action_type=ActionType(action_type).value,
                details=details or {},
            )
            session.add(entry)
            session.commit()
            return entry.id
    except Exception:
        logger.exception(f"Failed to insert action log {action_type}")
        return None
