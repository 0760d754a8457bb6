from sqlmodel import SQLModel, Field
from sqlalchemy import CheckConstraint
from typing import Optional
from datetime import datetime
from decimal import Decimal

from bookstore.utils.clock import utc_now


class Book(SQLModel, table=True):
    __table_args__ = (
        CheckConstraint("stock_quantity >= 0", name="ck_book_stock_non_negative"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    author: str = ""
    image_url: str = Field(default="/uploads/book_covers/placeholder.jpg")

    # Shop details
    price: Decimal = Field(max_digits=10, decimal_places=2)
    stock_quantity: int = Field(default=0)
    is_active: bool = True

    # timestamps
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
