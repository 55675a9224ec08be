# bookstore/services/book_service.py
from typing import Dict, Any, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookstore.data.models.book import BookModel
from bookstore.domain.schemas import BookCreate, BookUpdate
from bookstore.repos.book_repo import BookRepo
from bookstore.repos.cart_repo import CartRepo
from bookstore.repos.order_repo import OrderRepo
from bookstore.repos.wishlist_repo import WishlistRepo
from bookstore.utils.logging import get_logger

logger = get_logger(__name__)

DUPLICATE_NAME = "A book with this name already exists"


class BookService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = BookRepo(db)
        self.orders = OrderRepo(db)
        self.carts = CartRepo(db)
        self.wishlist = WishlistRepo(db)

    def list_books(self) -> List[BookModel]:
        return self.repo.list_books()

    def sort_by_price(self, direction: str) -> List[BookModel]:
        if direction not in ("asc", "desc"):
            raise ValueError("Direction must be 'asc' or 'desc'")
        return self.repo.list_books(order_by_price=direction)

    def search(self, keyword: str) -> List[BookModel]:
        keyword = keyword.strip()
        if not keyword:
            raise ValueError("Keyword must not be empty")
        return self.repo.search_books(keyword)

    def get_book(self, book_id: int) -> BookModel:
        book = self.repo.get_book(book_id)
        if not book:
            raise LookupError("Book not found")
        return book

    def add_book(self, payload: BookCreate) -> BookModel:
        if self.repo.get_book_by_name(payload.name):
            raise ValueError(DUPLICATE_NAME)

        try:
            book = self.repo.create_book(BookModel(**payload.model_dump()))
        except IntegrityError:
            # same name inserted by a concurrent request
            self.db.rollback()
            raise ValueError(DUPLICATE_NAME)

        logger.info(f"Book {book.id} '{book.name}' added with quantity {book.quantity}")
        return book

    def update_book(self, book_id: int, payload: BookUpdate) -> BookModel:
        book = self.get_book(book_id)
        changes: Dict[str, Any] = payload.model_dump(exclude_unset=True)

        for field in ("name", "author", "price", "quantity"):
            if field in changes and changes[field] is None:
                raise ValueError(f"{field.capitalize()} must not be empty")

        new_name = changes.get("name")
        if new_name and new_name != book.name and self.repo.get_book_by_name(new_name):
            raise ValueError(DUPLICATE_NAME)

        try:
            book = self.repo.update_book(book, changes)
        except IntegrityError:
            self.db.rollback()
            raise ValueError(DUPLICATE_NAME)

        logger.info(f"Book {book_id} updated: {sorted(changes)}")
        return book

    def delete_book(self, book_id: int):
        """
        Removes a book that was never ordered.
        Cart and wishlist lines pointing at it go with it,
        ledger rows are immutable so an ordered book stays.
        """
        book = self.get_book(book_id)

        if self.orders.count_orders_for_book(book_id):
            raise ValueError("Book has orders and cannot be deleted")

        cart_lines = self.carts.delete_items_for_book(book_id)
        wishlist_lines = self.wishlist.delete_items_for_book(book_id)
        self.repo.delete_book(book)

        logger.info(
            f"Book {book_id} deleted with {cart_lines} cart and {wishlist_lines} wishlist lines"
        )

    def add_quantity(self, book_id: int, amount: int) -> BookModel:
        if amount <= 0:
            raise ValueError("Quantity must be greater than 0")

        if not self.repo.add_quantity(book_id, amount):
            raise LookupError("Book not found")

        self.repo.commit()
        logger.info(f"Book {book_id} restocked by {amount}")
        return self.get_book(book_id)
