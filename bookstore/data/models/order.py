from sqlalchemy import Column, Integer, ForeignKey, String, DateTime, Numeric
from datetime import datetime, timezone

from bookstore.data.database import Base


class OrderModel(Base):
    """Append-only: one row per ordered book line, never updated or deleted."""

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    order_id = Column(String(36), nullable=False, unique=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    book_id = Column(Integer, ForeignKey("books.id"), nullable=False)
    address_id = Column(Integer, ForeignKey("addresses.id"), nullable=False)

    quantity = Column(Integer, nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
