from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from bookstore.database import get_session
from bookstore.models.user import User
from bookstore.schemas.orders_schemas import OrderListItem, OrderRead
from bookstore.services import order_service
from bookstore.services.order_service import CallerIdentity
from bookstore.utils.token import get_current_user, get_optional_user

router = APIRouter()


@router.get("/me", response_model=List[OrderListItem])
def my_orders(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return order_service.list_orders_for_user(session, current_user.id)


@router.get("/{order_id}", response_model=OrderRead)
def get_order(
    order_id: int,
    token: Optional[str] = None,
    session: Session = Depends(get_session),
    current_user: Optional[User] = Depends(get_optional_user),
):
    caller = CallerIdentity(
        user_id=current_user.id if current_user else None,
        order_token=token,
    )
    order = order_service.get_order(session, order_id, caller)

    # same answer for "missing" and "not yours"
    if order is None:
        raise HTTPException(404, "Order not found")

    return OrderRead.model_validate(order)
