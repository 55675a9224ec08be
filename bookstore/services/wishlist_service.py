from typing import Dict, Any, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookstore.data.models.wishlist_item import WishlistItemModel
from bookstore.repos.book_repo import BookRepo
from bookstore.repos.wishlist_repo import WishlistRepo
from bookstore.utils.logging import get_logger

logger = get_logger(__name__)

ALREADY_LISTED = "Book is already in the wishlist"


class WishlistService:
    def __init__(self, db: Session):
        self.repo = WishlistRepo(db)
        self.books = BookRepo(db)

    def get_wishlist(self, user_id: int) -> List[Dict[str, Any]]:
        return [
            {
                "id": i.id,
                "book_id": i.book_id,
                "name": i.book.name,
                "author": i.book.author,
                "price": i.book.price,
            }
            for i in self.repo.get_items(user_id)
        ]

    def add_book(self, user_id: int, book_id: int) -> List[Dict[str, Any]]:
        book = self.books.get_book(book_id)
        if not book:
            raise LookupError("Book not found")

        if book.quantity == 0:
            raise ValueError("Book is out of stock")

        if self.repo.get_item_for_book(user_id, book_id):
            raise ValueError(ALREADY_LISTED)

        try:
            self.repo.add_item(WishlistItemModel(user_id=user_id, book_id=book_id))
        except IntegrityError:
            self.repo.rollback()
            raise ValueError(ALREADY_LISTED)

        logger.info(f"Book {book_id} added to wishlist of user {user_id}")
        return self.get_wishlist(user_id)

    def remove_item(self, user_id: int, item_id: int) -> List[Dict[str, Any]]:
        item = self.repo.get_item(item_id)
        if not item:
            raise LookupError("Book not found in wishlist")
        if item.user_id != user_id:
            raise PermissionError("No access to this wishlist item")

        self.repo.delete_item(item)
        logger.info(f"Wishlist item {item_id} removed for user {user_id}")
        return self.get_wishlist(user_id)
