from sqlmodel import SQLModel, Field, Relationship
from typing import List, Optional
from datetime import datetime
from decimal import Decimal

from bookstore.constants.order_status import OrderStatus
from bookstore.utils.clock import utc_now
from bookstore.models.order_item import OrderItem


class Order(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    # null for guest checkout
    user_id: Optional[int] = Field(default=None, foreign_key="user.id", index=True)

    guest_name: str
    guest_email: str
    guest_phone: str
    shipping_address: str

    # written once at placement
    total_amount: Decimal = Field(max_digits=10, decimal_places=2)

    status: str = Field(default=OrderStatus.pending.value, index=True)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    items: List["OrderItem"] = Relationship(back_populates="order")
