# bookstore/repos/order_repo.py
import uuid
from decimal import Decimal

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from bookstore.data.models.order import OrderModel


class OrderRepo:
    """Order ledger. Append-only, so there is no update or delete."""

    def __init__(self, db: Session):
        self.db = db

    def create_order(
        self,
        user_id: int,
        book_id: int,
        address_id: int,
        quantity: int,
        total_price: Decimal,
    ) -> OrderModel:
        # flush only, commit belongs to the workflow transaction
        order = OrderModel(
            order_id=str(uuid.uuid4()),
            user_id=user_id,
            book_id=book_id,
            address_id=address_id,
            quantity=quantity,
            total_price=total_price,
        )
        self.db.add(order)
        self.db.flush()
        return order

    def get_order(self, order_id: str) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel).where(OrderModel.order_id == order_id)
        ).scalar_one_or_none()

    def list_orders_for_user(self, user_id: int) -> list[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .where(OrderModel.user_id == user_id)
                .order_by(OrderModel.id.desc())
            ).scalars().all()
        )

    def count_orders(self) -> int:
        return self.db.execute(select(func.count()).select_from(OrderModel)).scalar_one()

    def count_orders_for_book(self, book_id: int) -> int:
        return self.db.execute(
            select(func.count()).select_from(OrderModel).where(OrderModel.book_id == book_id)
        ).scalar_one()
