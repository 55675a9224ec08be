from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, DateTime, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship

from bookstore.data.database import Base


class CartItemModel(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    book_id = Column(Integer, ForeignKey("books.id", ondelete="CASCADE"), nullable=False)

    quantity = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    book = relationship("BookModel")

    __table_args__ = (
        UniqueConstraint("user_id", "book_id", name="u_cart_user_book"),
        CheckConstraint("quantity > 0", name="ck_cart_items_quantity_positive"),
    )
