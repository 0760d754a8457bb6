import logging

from sqlmodel import Session

from bookstore.config import settings
from bookstore.exceptions import (
    BookUnavailable,
    CartFull,
    InvalidQuantity,
    ItemNotFound,
    StockExceeded,
)
from bookstore.models.book import Book
from bookstore.models.cart import Cart, CartItem
from bookstore.services.cart_store import CartStore

logger = logging.getLogger(__name__)


def _save(store: CartStore, cart: Cart) -> Cart:
    cart.recalculate()
    store.save(cart)
    return cart


def get_cart(store: CartStore) -> Cart:
    return store.load().recalculate()


def add_item(session: Session, store: CartStore, book_id: int, quantity: int) -> Cart:
    """Adds a book to the cart, or bumps the quantity if it is already there."""
    if quantity <= 0:
        raise InvalidQuantity(quantity)

    book = session.get(Book, book_id, populate_existing=True)
    if not book or not book.is_active:
        raise BookUnavailable(book_id)

    cart = store.load()
    existing = cart.find(book_id)
    if existing is None and len(cart.items) >= settings.cart_max_lines:
        raise CartFull(settings.cart_max_lines)

    new_quantity = quantity + (existing.quantity if existing else 0)

    if new_quantity > book.stock_quantity:
        raise StockExceeded(book_id, book.stock_quantity)

    if existing:
        existing.quantity = new_quantity
        existing.stock_quantity = book.stock_quantity
    else:
        cart.items.append(
            CartItem(
                book_id=book.id,
                title=book.title,
                author=book.author,
                image_url=book.image_url,
                price=book.price,
                quantity=quantity,
                stock_quantity=book.stock_quantity,
            )
        )

    logger.info(f"Cart {cart.cart_id}: book {book_id} quantity now {new_quantity}")
    return _save(store, cart)


def update_item(session: Session, store: CartStore, book_id: int, quantity: int) -> Cart:
    cart = store.load()
    item = cart.find(book_id)
    if item is None:
        raise ItemNotFound(book_id)

    if quantity <= 0:
        raise InvalidQuantity(quantity)

    book = session.get(Book, book_id, populate_existing=True)
    available = book.stock_quantity if book and book.is_active else 0
    if quantity > available:
        raise StockExceeded(book_id, available)

    item.quantity = quantity
    item.stock_quantity = available
    return _save(store, cart)


def remove_item(store: CartStore, book_id: int) -> Cart:
    cart = store.load()
    remaining = [item for item in cart.items if item.book_id != book_id]

    if len(remaining) == len(cart.items):
        raise ItemNotFound(book_id)

    cart.items = remaining
    return _save(store, cart)


def clear_cart(store: CartStore) -> Cart:
    return _save(store, Cart())
