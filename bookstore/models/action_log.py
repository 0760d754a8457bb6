from datetime import datetime
from enum import Enum
from typing import Optional

from sqlmodel import SQLModel, Field
from sqlalchemy import Column, JSON

from bookstore.utils.clock import utc_now


class ActionType(str, Enum):
    ORDER_PLACED = "ORDER_PLACED"
    ORDER_STATUS_UPDATED = "ORDER_STATUS_UPDATED"


class ActionLog(SQLModel, table=True):
    __tablename__ = "action_log"

    id: Optional[int] = Field(default=None, primary_key=True)
    # null for guests and system actions
    user_id: Optional[int] = Field(default=None, index=True)
    action_type: str = Field(index=True)
    details: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    created_at: datetime = Field(default_factory=utc_now)
