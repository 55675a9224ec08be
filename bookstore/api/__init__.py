# bookstore/api/__init__.py
from fastapi import FastAPI
from bookstore.api.routers import health, users, books, carts, wishlist, addresses, orders


def register_routers(app: FastAPI) -> FastAPI:
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(books.router)
    app.include_router(carts.router)
    app.include_router(wishlist.router)
    app.include_router(addresses.router)
    app.include_router(orders.router)
    return app
