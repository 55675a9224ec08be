# bookstore/data/models/book.py
from sqlalchemy import Column, Integer, String, Text, Numeric, CheckConstraint

from bookstore.data.database import Base


class BookModel(Base):
    __tablename__ = "books"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False, unique=True, index=True)
    author = Column(String, nullable=False)
    description = Column(Text, nullable=True)

    price = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_books_quantity_non_negative"),
        CheckConstraint("price >= 0", name="ck_books_price_non_negative"),
    )
