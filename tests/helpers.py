from sqlmodel import Session, func, select

from bookstore.models.cart import Cart, CartItem


def cart_with(*books_and_quantities) -> Cart:
    """Build a cart the way add_item would, from (book, quantity) pairs."""
    cart = Cart(
        items=[
            CartItem(
                book_id=book.id,
                title=book.title,
                author=book.author,
                price=book.price,
                quantity=quantity,
                stock_quantity=book.stock_quantity,
            )
            for book, quantity in books_and_quantities
        ]
    )
    return cart.recalculate()


def count_rows(session: Session, model) -> int:
    return session.exec(select(func.count()).select_from(model)).one()
