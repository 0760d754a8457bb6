import logging

from sqlalchemy import select, update
from sqlmodel import Session

from bookstore.exceptions import InsufficientStock
from bookstore.models.book import Book
from bookstore.utils.clock import utc_now

logger = logging.getLogger(__name__)


def _stock_row(session: Session, book_id: int):
    return session.execute(
        select(Book.title, Book.stock_quantity, Book.is_active).where(Book.id == book_id)
    ).first()


def available_stock(session: Session, book_id: int) -> int:
    row = _stock_row(session, book_id)

    if row is None or not row.is_active:
        return 0
    return row.stock_quantity


def reserve_stock(session: Session, book_id: int, quantity: int, title: str) -> int:
    """
    Decrement stock only if enough is left, in the caller's transaction.

    The check and the write are one conditional UPDATE, so two checkouts
    racing for the last copies cannot both succeed. Returns the new stock
    level; raises InsufficientStock when the condition fails.
    """
    result = session.execute(
        update(Book)
        .where(
            Book.id == book_id,
            Book.is_active == True,  # noqa: E712
            Book.stock_quantity >= quantity,
        )
        .values(
            stock_quantity=Book.stock_quantity - quantity,
            updated_at=utc_now(),
        )
        .execution_options(synchronize_session=False)
    )

    if result.rowcount != 1:
        row = _stock_row(session, book_id)
        # named like validate_stock does: live title, cart title once the book is gone
        if row is not None and row.is_active:
            title, available = row.title, row.stock_quantity
        else:
            available = 0
        logger.info(f"Stock reservation refused for book {book_id}: wanted {quantity}, have {available}")
        raise InsufficientStock(title, available)

    return available_stock(session, book_id)
