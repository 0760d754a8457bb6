import logging
from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Optional

from fastapi import Request, Response
from pydantic import ValidationError

from bookstore.config import settings
from bookstore.models.cart import Cart
from bookstore.utils.token import create_access_token, decode_access_token

logger = logging.getLogger(__name__)

CART_SCOPE = "cart"

# browsers silently drop cookies past 4096 bytes
COOKIE_SIZE_WARNING = 3800


class CartStore(ABC):
    """Session-scoped storage for one shopper's cart."""

    @abstractmethod
    def load(self) -> Cart:
        ...

    @abstractmethod
    def save(self, cart: Cart) -> None:
        ...


def encode_cart(cart: Cart) -> str:
    return create_access_token(
        {"scope": CART_SCOPE, "cart": cart.model_dump(mode="json")},
        timedelta(seconds=settings.cart_cookie_max_age),
    )


def decode_cart(token: Optional[str]) -> Optional[Cart]:
    if not token:
        return None

    payload = decode_access_token(token)
    if payload is None or payload.get("scope") != CART_SCOPE:
        logger.warning("Discarding cart cookie with bad signature or scope")
        return None

    try:
        cart = Cart.model_validate(payload.get("cart") or {})
    except ValidationError:
        logger.warning("Discarding malformed cart cookie")
        return None

    # always recompute on load so totals can never drift from the lines
    return cart.recalculate()


class CookieCartStore(CartStore):
    """Keeps the cart in a signed, httponly cookie."""

    def __init__(self, request: Request, response: Response):
        self.request = request
        self.response = response

    def load(self) -> Cart:
        token = self.request.cookies.get(settings.cart_cookie_name)
        return decode_cart(token) or Cart()

    def save(self, cart: Cart) -> None:
        token = encode_cart(cart)
        if len(token) > COOKIE_SIZE_WARNING:
            logger.warning(f"Cart {cart.cart_id} cookie is {len(token)} bytes, near the browser limit")

        self.response.set_cookie(
            settings.cart_cookie_name,
            token,
            max_age=settings.cart_cookie_max_age,
            httponly=True,
            secure=settings.env == "production",
            samesite="lax",
        )
