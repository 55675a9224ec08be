from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from bookstore.data.models.wishlist_item import WishlistItemModel


class WishlistRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_items(self, user_id: int) -> list[WishlistItemModel]:
        return list(
            self.db.execute(
                select(WishlistItemModel)
                .where(WishlistItemModel.user_id == user_id)
                .order_by(WishlistItemModel.id)
            ).scalars().all()
        )

    def get_item(self, item_id: int) -> WishlistItemModel | None:
        return self.db.get(WishlistItemModel, item_id)

    def get_item_for_book(self, user_id: int, book_id: int) -> WishlistItemModel | None:
        return self.db.execute(
            select(WishlistItemModel).where(
                WishlistItemModel.user_id == user_id,
                WishlistItemModel.book_id == book_id,
            )
        ).scalar_one_or_none()

    def add_item(self, item: WishlistItemModel) -> WishlistItemModel:
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        return item

    def delete_item(self, item: WishlistItemModel):
        self.db.delete(item)
        self.db.commit()

    def rollback(self):
        self.db.rollback()

    def delete_items_for_book(self, book_id: int) -> int:
        result = self.db.execute(
            delete(WishlistItemModel)
            .where(WishlistItemModel.book_id == book_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
