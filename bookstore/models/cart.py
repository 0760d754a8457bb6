from decimal import Decimal
from typing import List
from uuid import uuid4

from sqlmodel import SQLModel, Field


class CartItem(SQLModel):
    book_id: int
    title: str
    author: str = ""
    image_url: str = ""
    quantity: int = Field(ge=1)
    # price snapshot taken when the line was added
    price: Decimal
    # display hint only; checkout always re-reads live stock
    stock_quantity: int = 0

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class Cart(SQLModel):
    """Shopping cart for one session, passed by value through checkout."""

    cart_id: str = Field(default_factory=lambda: uuid4().hex)
    items: List[CartItem] = Field(default_factory=list)
    total_quantity: int = 0
    total_amount: Decimal = Decimal("0")

    def recalculate(self) -> "Cart":
        self.total_quantity = sum(item.quantity for item in self.items)
        self.total_amount = sum(
            (item.line_total for item in self.items), Decimal("0")
        )
        return self

    def find(self, book_id: int):
        for item in self.items:
            if item.book_id == book_id:
                return item
        return None

    @property
    def is_empty(self) -> bool:
        return not self.items
