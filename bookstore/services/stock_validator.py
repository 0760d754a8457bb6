from typing import Iterable

from sqlmodel import Session

from bookstore.exceptions import InsufficientStock
from bookstore.models.book import Book
from bookstore.models.cart import CartItem


def validate_stock(session: Session, items: Iterable[CartItem]) -> None:
    """
    Check each requested line against the live book record, in cart order.

    Stops at the first line that cannot be filled. A missing or inactive
    book counts as zero available and is reported under the cart's title.
    """
    for item in items:
        book = session.get(Book, item.book_id, populate_existing=True)

        if book is None or not book.is_active:
            raise InsufficientStock(item.title, 0)

        if book.stock_quantity < item.quantity:
            raise InsufficientStock(book.title, book.stock_quantity)
