from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends
from sqlmodel import Session

from bookstore.database import get_session
from bookstore.models.user import User
from bookstore.notifications import NotificationDispatcher, get_dispatcher
from bookstore.schemas.orders_schemas import (
    OrderListItem,
    OrderRead,
    StatusOption,
    StatusUpdateRequest,
)
from bookstore.services import order_service
from bookstore.utils.token import require_admin

router = APIRouter()


@router.get("", response_model=List[OrderListItem])
def list_orders(
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin),
):
    return order_service.list_orders(session)


@router.get("/statuses", response_model=List[StatusOption])
def list_statuses(admin: User = Depends(require_admin)):
    return order_service.list_statuses()


@router.get("/{order_id}", response_model=OrderRead)
def get_order(
    order_id: int,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin),
):
    order = order_service.get_order_for_admin(session, order_id)
    return OrderRead.model_validate(order)


@router.patch("/{order_id}/status")
def update_order_status(
    order_id: int,
    data: StatusUpdateRequest,
    background_tasks: BackgroundTasks,
    session: Session = Depends(get_session),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
    admin: User = Depends(require_admin),
):
    order_service.transition_order_status(
        session,
        order_id,
        data.status,
        acting_user_id=admin.id,
        dispatcher=dispatcher,
        background_tasks=background_tasks,
    )

    return {
        "message": "Order status updated",
        "order_id": order_id,
        "status": data.status,
    }
