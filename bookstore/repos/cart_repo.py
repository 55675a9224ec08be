# bookstore/repos/cart_repo.py
from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from bookstore.data.models.cart_item import CartItemModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart_items(self, user_id: int) -> list[CartItemModel]:
        # insertion order is the checkout order
        return list(
            self.db.execute(
                select(CartItemModel)
                .where(CartItemModel.user_id == user_id)
                .order_by(CartItemModel.id)
            ).scalars().all()
        )

    def get_cart_item(self, item_id: int) -> CartItemModel | None:
        return self.db.get(CartItemModel, item_id)

    def get_cart_item_for_book(self, user_id: int, book_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.user_id == user_id,
                CartItemModel.book_id == book_id,
            )
        ).scalar_one_or_none()

    def add_cart_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def delete_cart_item(self, item_id: int) -> bool:
        """0 rows affected means another request already consumed the line."""
        result = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.id == item_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def delete_items_for_book(self, book_id: int) -> int:
        # no commit, runs inside the book delete
        result = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.book_id == book_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
