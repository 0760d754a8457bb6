from fastapi import APIRouter, Depends, Request, Response
from sqlmodel import Session

from bookstore.database import get_session
from bookstore.models.cart import Cart
from bookstore.schemas.cart_schemas import CartAddRequest, CartUpdateRequest
from bookstore.services import cart_service
from bookstore.services.cart_store import CookieCartStore

router = APIRouter()


def get_cart_store(request: Request, response: Response) -> CookieCartStore:
    return CookieCartStore(request, response)


# View Cart

@router.get("", response_model=Cart)
def get_cart(store: CookieCartStore = Depends(get_cart_store)):
    return cart_service.get_cart(store)


# Add to Cart

@router.post("/add", response_model=Cart)
def add_to_cart(
    data: CartAddRequest,
    session: Session = Depends(get_session),
    store: CookieCartStore = Depends(get_cart_store),
):
    return cart_service.add_item(session, store, data.book_id, data.quantity)


# Update Cart

@router.put("/update/{book_id}", response_model=Cart)
def update_cart_item(
    book_id: int,
    data: CartUpdateRequest,
    session: Session = Depends(get_session),
    store: CookieCartStore = Depends(get_cart_store),
):
    return cart_service.update_item(session, store, book_id, data.quantity)


# Remove Cart

@router.delete("/remove/{book_id}", response_model=Cart)
def remove_item(
    book_id: int,
    store: CookieCartStore = Depends(get_cart_store),
):
    return cart_service.remove_item(store, book_id)
