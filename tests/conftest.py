from decimal import Decimal

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from bookstore import models  # noqa: F401
from bookstore.models.book import Book
from bookstore.models.cart import Cart
from bookstore.models.order import Order
from bookstore.models.user import User
from bookstore.notifications import (
    Channel,
    NotificationChannel,
    NotificationDispatcher,
)
from bookstore.schemas.checkout_schemas import ContactDetails
from bookstore.services.cart_store import CartStore


class MemoryCartStore(CartStore):
    """Cart store that keeps the serialized cart in memory, like a cookie jar."""

    def __init__(self, cart: Cart | None = None):
        self._cart = cart or Cart()
        self.saves = 0

    def load(self) -> Cart:
        return self._cart.model_copy(deep=True)

    def save(self, cart: Cart) -> None:
        self._cart = cart.model_copy(deep=True)
        self.saves += 1


class RecordingChannel(NotificationChannel):
    """Channel that records every send attempt for assertions."""

    def __init__(self):
        self.sent = []
        self.should_succeed = True
        self.should_raise = False

    def send(self, recipient, content):
        if self.should_raise:
            raise RuntimeError("channel is down")
        self.sent.append({"to": recipient, "subject": content.subject, "body": content.body})
        return self.should_succeed


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def make_book(session):
    def _make(title="Book", price="500.00", stock=5, is_active=True):
        book = Book(
            title=title,
            author="Author",
            price=Decimal(price),
            stock_quantity=stock,
            is_active=is_active,
        )
        session.add(book)
        session.commit()
        session.refresh(book)
        return book

    return _make


@pytest.fixture
def make_user(session):
    def _make(role="user", email="reader@bookmail.co.ke"):
        user = User(first_name="Ada", last_name="Reader", email=email, role=role)
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make


@pytest.fixture
def customer_channel():
    return RecordingChannel()


@pytest.fixture
def admin_channel():
    return RecordingChannel()


@pytest.fixture
def admin_email_channel():
    return RecordingChannel()


@pytest.fixture
def dispatcher(customer_channel, admin_channel, admin_email_channel):
    return NotificationDispatcher({
        Channel.EMAIL_CUSTOMER: customer_channel,
        Channel.ALERT_ADMIN: admin_channel,
        Channel.EMAIL_ADMIN: admin_email_channel,
    })


@pytest.fixture
def contact():
    return ContactDetails(
        name="Jane Wanjiru",
        email="jane.wanjiru@bookmail.co.ke",
        phone="+254700000001",
        address="12 Moi Avenue, Nairobi",
    )


@pytest.fixture
def cart_store():
    return MemoryCartStore()


@pytest.fixture
def make_order(session):
    def _make(status="pending", user_id=None, email="jane.wanjiru@bookmail.co.ke"):
        order = Order(
            user_id=user_id,
            guest_name="Jane Wanjiru",
            guest_email=email,
            guest_phone="+254700000001",
            shipping_address="12 Moi Avenue, Nairobi",
            total_amount=Decimal("1000.00"),
            status=status,
        )
        session.add(order)
        session.commit()
        session.refresh(order)
        return order

    return _make
