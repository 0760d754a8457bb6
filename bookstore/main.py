import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bookstore.config import settings
from bookstore.database import create_db_and_tables
from bookstore.exceptions import BookstoreError, PersistenceError
from bookstore.logging_config import setup_logging
from bookstore.routes import admin_orders, cart, checkout, orders

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    # Run DB creation ONLY in local, alembic owns the schema elsewhere
    if settings.env == "local":
        create_db_and_tables()
    yield


app = FastAPI(title="Bookstore Orders API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(BookstoreError)
async def bookstore_error_handler(request: Request, exc: BookstoreError):
    if isinstance(exc, PersistenceError):
        # cause is for the logs only
        logger.error(f"{request.method} {request.url.path} failed", exc_info=exc.__cause__ or exc)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


app.include_router(cart.router, prefix="/cart", tags=["Cart"])
app.include_router(checkout.router, prefix="/checkout", tags=["Checkout"])
app.include_router(orders.router, prefix="/orders", tags=["Orders"])
app.include_router(admin_orders.router, prefix="/admin/orders", tags=["Admin Orders"])


@app.get("/")
def root():
    return {
        "cart": [
            "/cart", "/cart/add", "/cart/update/{book_id}", "/cart/remove/{book_id}"
        ],
        "checkout": ["/checkout/place-order"],
        "orders": ["/orders/me", "/orders/{order_id}"],
        "admin_orders": [
            "/admin/orders", "/admin/orders/statuses",
            "/admin/orders/{order_id}", "/admin/orders/{order_id}/status"
        ],
    }
