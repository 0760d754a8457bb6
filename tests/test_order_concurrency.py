"""Concurrent checkouts racing for the same copies.

Runs against a file database so each thread gets its own connection.
"""

import threading
from decimal import Decimal

import pytest
from sqlmodel import Session, SQLModel, create_engine

from bookstore import models  # noqa: F401
from bookstore.exceptions import InsufficientStock, PersistenceError
from bookstore.models.book import Book
from bookstore.models.order import Order
from bookstore.services import order_service
from tests.helpers import cart_with, count_rows

CHECKOUTS = 4


@pytest.fixture
def file_engine(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'race.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


def test_last_copy_is_sold_once(file_engine, contact, dispatcher, customer_channel):
    with Session(file_engine) as session:
        book = Book(title="Last Copy", price=Decimal("950.00"), stock_quantity=1)
        session.add(book)
        session.commit()
        session.refresh(book)
        cart = cart_with((book, 1))

    barrier = threading.Barrier(CHECKOUTS)
    placed, refused, unexpected = [], [], []

    def checkout():
        with Session(file_engine) as session:
            barrier.wait()
            try:
                placed.append(
                    order_service.place_order(session, cart, contact, dispatcher=dispatcher)
                )
            # a lock timeout is also a refusal, never a second sale
            except (InsufficientStock, PersistenceError) as exc:
                refused.append(exc)
            except Exception as exc:
                unexpected.append(exc)

    threads = [threading.Thread(target=checkout) for _ in range(CHECKOUTS)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=60)

    assert unexpected == []
    assert len(placed) == 1
    assert len(refused) == CHECKOUTS - 1

    with Session(file_engine) as session:
        assert session.get(Book, book.id).stock_quantity == 0
        assert count_rows(session, Order) == 1

    assert len(customer_channel.sent) == 1
