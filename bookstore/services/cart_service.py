# bookstore/services/cart_service.py
from decimal import Decimal
from typing import Dict, Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookstore.data.models.cart_item import CartItemModel
from bookstore.repos.book_repo import BookRepo
from bookstore.repos.cart_repo import CartRepo
from bookstore.repos.wishlist_repo import WishlistRepo
from bookstore.utils.logging import get_logger

logger = get_logger(__name__)

ALREADY_IN_CART = "Book is already in the cart"


class CartService:
    """
    Cart use cases.
    commands (add, remove, increment, decrement) change state,
    query (get) only reads
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.books = BookRepo(db)
        self.wishlist = WishlistRepo(db)

    # query
    def get_cart(self, user_id: int) -> Dict[str, Any]:
        items = self.repo.get_cart_items(user_id)
        total = sum((i.book.price * i.quantity for i in items), Decimal("0.00"))

        return {
            "user_id": user_id,
            "items": [
                {
                    "id": i.id,
                    "book_id": i.book_id,
                    "name": i.book.name,
                    "author": i.book.author,
                    "price": i.book.price,
                    "quantity": i.quantity,
                }
                for i in items
            ],
            "total": total,
        }

    # commands
    def add_book(self, user_id: int, book_id: int, quantity: int = 1) -> Dict[str, Any]:
        if quantity <= 0:
            raise ValueError("Quantity must be greater than 0")

        book = self.books.get_book(book_id)
        if not book:
            raise LookupError("Book not found")

        if book.quantity == 0:
            raise ValueError("Book is out of stock")

        if self.repo.get_cart_item_for_book(user_id, book_id):
            raise ValueError(ALREADY_IN_CART)

        try:
            self.repo.add_cart_item(
                CartItemModel(user_id=user_id, book_id=book_id, quantity=quantity)
            )
            self.repo.commit()
        except IntegrityError:
            # u_cart_user_book, a concurrent add won
            self.repo.rollback()
            raise ValueError(ALREADY_IN_CART)

        logger.info(f"Book {book_id} added to cart of user {user_id}")
        return self.get_cart(user_id)

    def add_from_wishlist(self, user_id: int, wishlist_id: int) -> Dict[str, Any]:
        entry = self.wishlist.get_item(wishlist_id)
        if not entry:
            raise LookupError("Wishlist item not found")

        if entry.user_id != user_id:
            raise PermissionError("No access to this wishlist item")

        return self.add_book(user_id, entry.book_id)

    def remove_item(self, user_id: int, item_id: int) -> Dict[str, Any]:
        self._owned_item(user_id, item_id)

        self.repo.delete_cart_item(item_id)
        self.repo.commit()

        logger.info(f"Cart item {item_id} removed for user {user_id}")
        return self.get_cart(user_id)

    def increment(self, user_id: int, item_id: int) -> Dict[str, Any]:
        item = self._owned_item(user_id, item_id)

        item.quantity += 1
        self.repo.add_cart_item(item)
        self.repo.commit()

        logger.info(f"Cart item {item_id} quantity increased")
        return self.get_cart(user_id)

    def decrement(self, user_id: int, item_id: int) -> Dict[str, Any]:
        item = self._owned_item(user_id, item_id)

        # line disappears at zero, quantity stays positive
        if item.quantity <= 1:
            self.repo.delete_cart_item(item_id)
            logger.info(f"Cart item {item_id} removed, quantity reached 0")
        else:
            item.quantity -= 1
            self.repo.add_cart_item(item)
            logger.info(f"Cart item {item_id} quantity decreased")

        self.repo.commit()
        return self.get_cart(user_id)

    def _owned_item(self, user_id: int, item_id: int) -> CartItemModel:
        item = self.repo.get_cart_item(item_id)

        if not item:
            raise LookupError("Item not found in cart")

        if item.user_id != user_id:
            raise PermissionError("No access to this cart item")

        return item
