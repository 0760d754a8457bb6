from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class OrderItemRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    book_id: int
    book_title: str
    quantity: int
    price_at_purchase: Decimal


class OrderRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: Optional[int] = None
    guest_name: str
    guest_email: str
    guest_phone: str
    shipping_address: str
    total_amount: Decimal
    status: str
    created_at: datetime
    updated_at: datetime
    items: List[OrderItemRead] = []


class OrderListItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    guest_name: str
    guest_email: str
    total_amount: Decimal
    status: str
    created_at: datetime


class StatusUpdateRequest(BaseModel):
    status: str


class StatusOption(BaseModel):
    status: str
    next_statuses: List[str]
