import os

# the module-level engine must never point at a real server during tests
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["NOTIFICATION_WEBHOOK_URL"] = ""

from decimal import Decimal

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

import bookstore.data.models  # noqa: F401
from bookstore.data.database import Base, make_engine, get_db
from bookstore.data.models import AddressModel, BookModel, CartItemModel, UserModel, WishlistItemModel
from bookstore.services.order_service import OrderService


class FakeNotifier:
    """Records notifications instead of enqueueing them."""

    def __init__(self):
        self.sent = []

    def send_order_notification(self, **kwargs):
        self.sent.append(kwargs)
        return True


class FakeLock:
    """In-process stand-in for the redis checkout lock."""

    def __init__(self):
        self.held = {}
        self.acquired = 0
        self.released = 0

    def acquire_checkout_lock(self, user_id, token, ttl):
        if user_id in self.held:
            return False
        self.held[user_id] = token
        self.acquired += 1
        return True

    def release_checkout_lock(self, user_id, token):
        if self.held.get(user_id) != token:
            return False
        del self.held[user_id]
        self.released += 1
        return True


@pytest.fixture
def engine(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'bookstore.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def lock():
    return FakeLock()


@pytest.fixture
def order_service(db, notifier, lock):
    return OrderService(db=db, notification_service=notifier, lock_service=lock)


@pytest.fixture
def make_user(db):
    def _make(user_id=1, name="Reader", email=None):
        user = UserModel(id=user_id, name=name, email=email or f"reader{user_id}@example.com")
        db.add(user)
        db.commit()
        return user

    return _make


@pytest.fixture
def make_book(db):
    def _make(name="Dune", author="Frank Herbert", price="12.50", quantity=10, description=None):
        book = BookModel(
            name=name,
            author=author,
            description=description,
            price=Decimal(price),
            quantity=quantity,
        )
        db.add(book)
        db.commit()
        return book

    return _make


@pytest.fixture
def make_address(db):
    def _make(user_id=1, city="Pune"):
        address = AddressModel(
            user_id=user_id,
            address="12 Baker Street",
            city=city,
            state="Maharashtra",
            landmark="Near the park",
            pincode="411001",
            address_type="home",
        )
        db.add(address)
        db.commit()
        return address

    return _make


@pytest.fixture
def add_to_cart(db):
    def _add(user_id, book, quantity=1):
        item = CartItemModel(user_id=user_id, book_id=book.id, quantity=quantity)
        db.add(item)
        db.commit()
        return item

    return _add


@pytest.fixture
def add_to_wishlist(db):
    def _add(user_id, book):
        item = WishlistItemModel(user_id=user_id, book_id=book.id)
        db.add(item)
        db.commit()
        return item

    return _add


@pytest.fixture
def client(session_factory, notifier, lock):
    from bookstore.api.routers import orders
    from bookstore.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    def override_order_service(session: Session = Depends(get_db)):
        return OrderService(db=session, notification_service=notifier, lock_service=lock)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[orders.get_service] = override_order_service
    yield TestClient(app)
    app.dependency_overrides.clear()
