from bookstore.models.user import User
from bookstore.models.book import Book
from bookstore.models.order import Order
from bookstore.models.order_item import OrderItem
from bookstore.models.action_log import ActionLog, ActionType
from bookstore.models.cart import Cart, CartItem

# add ALL table models here so metadata.create_all and alembic see them
