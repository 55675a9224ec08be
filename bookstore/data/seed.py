# bookstore/data/seed.py
from decimal import Decimal

from bookstore.data.database import SessionLocal, init_database
from bookstore.data.models import BookModel, UserModel
from bookstore.utils.logging import get_logger

logger = get_logger(__name__)

BOOKS = [
    {"name": "The Pragmatic Programmer", "author": "Andrew Hunt", "price": Decimal("39.99"), "quantity": 12},
    {"name": "Clean Code", "author": "Robert C. Martin", "price": Decimal("32.50"), "quantity": 8},
    {"name": "Fluent Python", "author": "Luciano Ramalho", "price": Decimal("54.00"), "quantity": 5},
    {"name": "Designing Data-Intensive Applications", "author": "Martin Kleppmann", "price": Decimal("47.25"), "quantity": 3},
]


def seed():
    init_database()
    db = SessionLocal()
    try:
        # not forcing: only seed if empty
        if db.query(BookModel).first():
            logger.info("Catalog already seeded")
            return
        db.add(UserModel(id=1, name="admin", email="admin@bookstore.local", role="admin"))
        db.add_all(BookModel(**b) for b in BOOKS)
        db.commit()
        logger.info(f"Seeded {len(BOOKS)} books")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
