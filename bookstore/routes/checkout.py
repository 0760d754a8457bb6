from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends
from sqlmodel import Session

from bookstore.database import get_session
from bookstore.models.user import User
from bookstore.notifications import NotificationDispatcher, get_dispatcher
from bookstore.routes.cart import get_cart_store
from bookstore.schemas.checkout_schemas import ContactDetails, PlaceOrderResponse
from bookstore.services import cart_service, order_service
from bookstore.services.cart_store import CookieCartStore
from bookstore.utils.token import get_optional_user

router = APIRouter()


@router.post("/place-order", response_model=PlaceOrderResponse)
def place_order(
    contact: ContactDetails,
    background_tasks: BackgroundTasks,
    session: Session = Depends(get_session),
    store: CookieCartStore = Depends(get_cart_store),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
    current_user: Optional[User] = Depends(get_optional_user),
):
    cart = store.load()

    placed = order_service.place_order(
        session,
        cart,
        contact,
        user_id=current_user.id if current_user else None,
        dispatcher=dispatcher,
        background_tasks=background_tasks,
    )

    # the cart is spent once the order exists
    cart_service.clear_cart(store)

    return PlaceOrderResponse(
        order_id=placed.order_id,
        order_token=placed.order_token,
        track_order_url=f"/orders/{placed.order_id}?token={placed.order_token}",
    )
