import logging
from dataclasses import dataclass
from typing import List, Optional

from fastapi import BackgroundTasks
from sqlalchemy import select as sa_select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from bookstore.constants.order_status import (
    ALLOWED_TRANSITIONS,
    CUSTOMER_NOTIFY_STATUSES,
    INITIAL_STATUS,
    OrderStatus,
    parse_status,
)
from bookstore.database import transaction
from bookstore.exceptions import (
    EmptyCartError,
    OrderNotFound,
    PersistenceError,
    UnknownStatus,
)
from bookstore.models.action_log import ActionType
from bookstore.models.cart import Cart
from bookstore.models.order import Order
from bookstore.models.order_item import OrderItem
from bookstore.notifications import NotificationDispatcher, OrderEvent, get_dispatcher
from bookstore.notifications import messages
from bookstore.schemas.checkout_schemas import ContactDetails
from bookstore.schemas.orders_schemas import OrderItemRead, OrderRead, StatusOption
from bookstore.services.audit_log import record_action
from bookstore.services.inventory_service import reserve_stock
from bookstore.services.stock_validator import validate_stock
from bookstore.utils.clock import utc_now
from bookstore.utils.token import create_order_token, verify_order_token

logger = logging.getLogger(__name__)

# compare-and-set retries when another admin changes the same order
MAX_STATUS_ATTEMPTS = 3


@dataclass
class PlacedOrder:
    order_id: int
    order_token: str


@dataclass
class CallerIdentity:
    user_id: Optional[int] = None
    order_token: Optional[str] = None


def _best_effort(label: str, func, *args, **kwargs):
    try:
        func(*args, **kwargs)
    except Exception:
        logger.exception(f"{label} failed")


# -------------------------
# ORDER PLACEMENT
# -------------------------

def _insert_order_items(session: Session, order_id: int, cart: Cart) -> List[OrderItem]:
    items = [
        OrderItem(
            order_id=order_id,
            book_id=line.book_id,
            book_title=line.title,
            quantity=line.quantity,
            price_at_purchase=line.price,
        )
        for line in cart.items
    ]
    session.add_all(items)
    session.flush()
    return items


def place_order(
    session: Session,
    cart: Cart,
    contact: ContactDetails,
    user_id: Optional[int] = None,
    dispatcher: Optional[NotificationDispatcher] = None,
    background_tasks: Optional[BackgroundTasks] = None,
) -> PlacedOrder:
    """
    Turn a cart into a persisted order.

    Stock is re-checked against live book rows, then the stock decrement,
    the order row and its item rows are written in one transaction. On
    commit the customer and admin notifications plus the audit entry are
    scheduled; none of them can affect the order once it exists.
    """
    if cart.is_empty:
        raise EmptyCartError()

    cart = cart.model_copy(deep=True).recalculate()

    # fail fast with a friendly error before opening the write transaction
    validate_stock(session, cart.items)

    status = INITIAL_STATUS
    now = utc_now()

    try:
        with transaction(session):
            # lock rows in a stable order so concurrent checkouts don't deadlock
            for line in sorted(cart.items, key=lambda line: line.book_id):
                reserve_stock(session, line.book_id, line.quantity, line.title)

            order = Order(
                user_id=user_id,
                guest_name=contact.name,
                guest_email=contact.email,
                guest_phone=contact.phone,
                shipping_address=contact.address,
                total_amount=cart.total_amount,
                status=status.value,
                created_at=now,
                updated_at=now,
            )
            session.add(order)
            session.flush()
            order_id = order.id

            _insert_order_items(session, order_id, cart)
    except SQLAlchemyError as exc:
        logger.error(f"Order placement failed for cart {cart.cart_id}: {exc!r}")
        raise PersistenceError() from exc

    logger.info(f"Order {order_id} placed: {cart.total_quantity} items, total {cart.total_amount}")

    summary = OrderRead(
        id=order_id,
        user_id=user_id,
        guest_name=contact.name,
        guest_email=contact.email,
        guest_phone=contact.phone,
        shipping_address=contact.address,
        total_amount=cart.total_amount,
        status=status.value,
        created_at=now,
        updated_at=now,
        items=[
            OrderItemRead(
                book_id=line.book_id,
                book_title=line.title,
                quantity=line.quantity,
                price_at_purchase=line.price,
            )
            for line in cart.items
        ],
    )

    dispatcher = dispatcher or get_dispatcher()
    bind = session.get_bind()
    if background_tasks is not None:
        background_tasks.add_task(_after_order_placed, bind, summary, dispatcher)
    else:
        _after_order_placed(bind, summary, dispatcher)

    return PlacedOrder(order_id=order_id, order_token=create_order_token(order_id))


def _after_order_placed(bind, summary: OrderRead, dispatcher: NotificationDispatcher):
    _best_effort(
        f"Order confirmation for order {summary.id}",
        lambda: dispatcher.dispatch(
            OrderEvent.ORDER_PLACED,
            summary.guest_email,
            messages.order_confirmation(summary, summary.items),
        ),
    )
    _best_effort(
        f"Admin alert for order {summary.id}",
        lambda: dispatcher.dispatch(
            OrderEvent.ORDER_PLACED_ADMIN,
            None,
            messages.admin_order_alert(summary, summary.items),
        ),
    )
    record_action(
        bind,
        summary.user_id,
        ActionType.ORDER_PLACED,
        {
            "order_id": summary.id,
            "total": str(summary.total_amount),
            "items_count": len(summary.items),
        },
    )


# -------------------------
# STATUS TRANSITIONS
# -------------------------

def _current_status(session: Session, order_id: int) -> Optional[str]:
    return session.execute(
        sa_select(Order.status).where(Order.id == order_id)
    ).scalar_one_or_none()


def transition_order_status(
    session: Session,
    order_id: int,
    target_status: str,
    acting_user_id: Optional[int],
    dispatcher: Optional[NotificationDispatcher] = None,
    background_tasks: Optional[BackgroundTasks] = None,
) -> bool:
    """
    Move an order to ``target_status``.

    Re-applying the current status is a silent no-op. The write is a
    compare-and-set on the old status, so of two concurrent requests for
    the same change only one lands and only one customer email goes out.
    """
    target = parse_status(target_status)
    if target is None:
        raise UnknownStatus(target_status)

    for _ in range(MAX_STATUS_ATTEMPTS):
        current = _current_status(session, order_id)
        if current is None:
            raise OrderNotFound(order_id)

        if current == target.value:
            logger.info(f"Order {order_id} status already set to {target.value}. Skipping update.")
            return True

        try:
            with transaction(session):
                result = session.execute(
                    update(Order)
                    .where(Order.id == order_id, Order.status == current)
                    .values(status=target.value, updated_at=utc_now())
                    .execution_options(synchronize_session=False)
                )
                changed = result.rowcount == 1
        except SQLAlchemyError as exc:
            logger.error(f"Status update failed for order {order_id}: {exc!r}")
            raise PersistenceError("Failed to update order status.") from exc

        if changed:
            break

        logger.info(f"Order {order_id} changed under us (was {current}), re-reading")
    else:
        raise PersistenceError("Order status is being changed concurrently, try again.")

    logger.info(f"Order {order_id} status {current} -> {target.value} by user {acting_user_id}")

    dispatcher = dispatcher or get_dispatcher()
    bind = session.get_bind()
    args = (bind, order_id, current, target, acting_user_id, dispatcher)
    if background_tasks is not None:
        background_tasks.add_task(_after_status_changed, *args)
    else:
        _after_status_changed(*args)

    return True


def _notify_status_update(
    bind,
    order_id: int,
    new_status: OrderStatus,
    dispatcher: NotificationDispatcher,
):
    with Session(bind) as session:
        order = session.get(Order, order_id)
        if order is None:
            logger.warning(f"Order {order_id} vanished before status email could be sent")
            return
        # the email reports the change that fired it, even if a later one already landed
        summary = OrderRead.model_validate(order).model_copy(
            update={"status": new_status.value}
        )

    dispatcher.dispatch(
        OrderEvent.STATUS_UPDATED,
        summary.guest_email,
        messages.status_update(summary),
    )


def _after_status_changed(
    bind,
    order_id: int,
    old_status: str,
    new_status: OrderStatus,
    acting_user_id: Optional[int],
    dispatcher: NotificationDispatcher,
):
    if new_status in CUSTOMER_NOTIFY_STATUSES:
        _best_effort(
            f"Status update notification for order {order_id}",
            _notify_status_update,
            bind,
            order_id,
            new_status,
            dispatcher,
        )

    record_action(
        bind,
        acting_user_id,
        ActionType.ORDER_STATUS_UPDATED,
        {
            "order_id": order_id,
            "old_status": old_status,
            "new_status": new_status.value,
        },
    )


# -------------------------
# QUERIES
# -------------------------

def get_order(session: Session, order_id: int, caller: CallerIdentity) -> Optional[Order]:
    """
    Fetch an order for its owner.

    Logged-in callers only see their own orders. Guests need the order
    token minted when the order was placed.
    """
    order = session.get(Order, order_id)
    if order is None:
        return None

    if caller.user_id is not None:
        if order.user_id == caller.user_id:
            return order
    elif verify_order_token(caller.order_token, order_id):
        return order

    logger.warning(f"Unauthorized attempt to view order {order_id}.")
    return None


def get_order_for_admin(session: Session, order_id: int) -> Order:
    order = session.get(Order, order_id)
    if order is None:
        raise OrderNotFound(order_id)
    return order


def list_orders(session: Session) -> List[Order]:
    return session.exec(
        select(Order).order_by(Order.created_at.desc(), Order.id.desc())
    ).all()


def list_orders_for_user(session: Session, user_id: int) -> List[Order]:
    return session.exec(
        select(Order)
        .where(Order.user_id == user_id)
        .order_by(Order.created_at.desc(), Order.id.desc())
    ).all()


def list_statuses() -> List[StatusOption]:
    return [
        StatusOption(
            status=status.value,
            next_statuses=[s.value for s in ALLOWED_TRANSITIONS[status]],
        )
        for status in OrderStatus
    ]
