"""Domain errors raised by the cart, checkout and order services.

Each error carries the HTTP status the API answers with; ``main.py`` maps
them to responses with a single exception handler.
"""


class BookstoreError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# -------- validation --------

class InvalidQuantity(BookstoreError):
    def __init__(self, quantity: int):
        super().__init__(f"Quantity must be at least 1, got {quantity}.")
        self.quantity = quantity


class EmptyCartError(BookstoreError):
    def __init__(self):
        super().__init__("Cannot place an empty order.")


class CartFull(BookstoreError):
    def __init__(self, max_lines: int):
        super().__init__(f"Cart cannot hold more than {max_lines} different books.")
        self.max_lines = max_lines


# -------- stock --------

class BookUnavailable(BookstoreError):
    status_code = 409

    def __init__(self, book_id: int):
        super().__init__("Book not found or is currently unavailable.")
        self.book_id = book_id


class StockExceeded(BookstoreError):
    status_code = 409

    def __init__(self, book_id: int, available: int):
        super().__init__(f"Quantity exceeds available stock of {available}.")
        self.book_id = book_id
        self.available = available


class InsufficientStock(BookstoreError):
    status_code = 409

    def __init__(self, book_title: str, available: int):
        super().__init__(
            f"Insufficient stock for book: {book_title} (available: {available})"
        )
        self.book_title = book_title
        self.available = available


# -------- not found --------

class ItemNotFound(BookstoreError):
    status_code = 404

    def __init__(self, book_id: int):
        super().__init__("Item not found in cart.")
        self.book_id = book_id


class OrderNotFound(BookstoreError):
    status_code = 404

    def __init__(self, order_id: int):
        super().__init__(f"Order {order_id} not found.")
        self.order_id = order_id


class UnknownStatus(BookstoreError):
    status_code = 404

    def __init__(self, status: str):
        super().__init__(f"Order status '{status}' does not exist.")
        self.status = status


# -------- persistence --------

class PersistenceError(BookstoreError):
    status_code = 500

    def __init__(self, message: str = "Failed to place order due to a server error."):
        super().__init__(message)
