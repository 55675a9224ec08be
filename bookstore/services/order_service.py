# bookstore/services/order_service.py
import uuid
from decimal import Decimal
from typing import Any, Dict, List

from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bookstore.data.models.book import BookModel
from bookstore.data.models.order import OrderModel
from bookstore.domain.results import OrderError, OrderResult
from bookstore.repos.address_repo import AddressRepo
from bookstore.repos.book_repo import BookRepo
from bookstore.repos.cart_repo import CartRepo
from bookstore.repos.order_repo import OrderRepo
from bookstore.services.lock_service import LockService
from bookstore.services.notification_service import NotificationService
from bookstore.utils.settings import CHECKOUT_LOCK_TTL_SECONDS
from bookstore.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Order placement workflow.

    Business failures come back as OrderResult.failure(...), they are not raised.
    Stock check and decrement are one conditional UPDATE (BookRepo.decrement_quantity),
    a cart checkout is a single transaction: every line is committed or none is.
    Notifications are enqueued only after commit.
    """

    def __init__(
        self,
        db: Session,
        notification_service: NotificationService,
        lock_service: LockService,
    ):
        self.db = db
        self.books = BookRepo(db)
        self.addresses = AddressRepo(db)
        self.carts = CartRepo(db)
        self.orders = OrderRepo(db)
        self.notification_service = notification_service
        self.lock_service = lock_service

    # commands
    def place_order(
        self,
        user_id: int,
        address_id: int,
        book_name: str,
        quantity: int,
    ) -> OrderResult:
        if quantity <= 0:
            logger.error(f"Rejected order of {quantity} copies of '{book_name}'")
            return OrderResult.failure(
                OrderError.INVALID_QUANTITY, "Quantity must be greater than 0"
            )

        book = self.books.get_book_by_name(book_name)
        if not book:
            logger.error(f"Book '{book_name}' is not available")
            return OrderResult.failure(
                OrderError.BOOK_NOT_FOUND, "We do not have this book in the store"
            )

        if book.quantity < quantity:
            logger.error(f"Stock for book {book.id} is not available ({book.quantity} < {quantity})")
            return OrderResult.failure(
                OrderError.INSUFFICIENT_STOCK, "This much stock is unavailable for the book"
            )

        address = self.addresses.get_address(address_id)
        if not address:
            logger.error(f"Address {address_id} does not exist")
            return OrderResult.failure(
                OrderError.ADDRESS_NOT_FOUND, "This address id is not available"
            )

        total_price = book.price * quantity
        book_name, book_author, book_id = book.name, book.author, book.id

        try:
            # stock is re-checked by the same UPDATE that decrements it
            if not self.books.decrement_quantity(book_id, quantity):
                self.db.rollback()
                logger.warning(f"Book {book_id} sold out before the order was committed")
                return OrderResult.failure(
                    OrderError.INSUFFICIENT_STOCK, "This much stock is unavailable for the book"
                )

            order = self.orders.create_order(
                user_id=user_id,
                book_id=book_id,
                address_id=address_id,
                quantity=quantity,
                total_price=total_price,
            )
            order_id = order.order_id
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"Placing order for book {book_id} failed")
            raise

        logger.info(f"Order {order_id} placed: user {user_id}, book {book_id}, quantity {quantity}")

        self.notification_service.send_order_notification(
            order_id=order_id,
            book_name=book_name,
            book_author=book_author,
            quantity=quantity,
            total_price=total_price,
            user_id=user_id,
        )

        return OrderResult.success(
            {
                "order_id": order_id,
                "quantity": quantity,
                "total_price": total_price,
            }
        )

    def place_order_by_cart(self, user_id: int, address_id: int) -> OrderResult:
        items = self.carts.get_cart_items(user_id)
        if not items:
            logger.error(f"Cart of user {user_id} is empty")
            return OrderResult.failure(OrderError.EMPTY_CART, "There is nothing in the cart")

        # one check for the whole cart, the address cannot change mid-checkout
        if not self.addresses.get_address(address_id):
            logger.error(f"Address {address_id} does not exist")
            return OrderResult.failure(
                OrderError.ADDRESS_NOT_FOUND, "This address id is not available"
            )

        token = uuid.uuid4().hex
        if not self.lock_service.acquire_checkout_lock(user_id, token, CHECKOUT_LOCK_TTL_SECONDS):
            logger.warning(f"Checkout for user {user_id} is already in progress")
            return OrderResult.failure(
                OrderError.CHECKOUT_CONFLICT, "Checkout for this cart is already in progress"
            )

        try:
            result, placed = self._checkout_lines(user_id, address_id)
        finally:
            self._release_lock(user_id, token)

        if not result.ok:
            return result

        for line in placed:
            self.notification_service.send_order_notification(
                order_id=line["order_id"],
                book_name=line["book_name"],
                book_author=line["book_author"],
                quantity=line["quantity"],
                total_price=line["total_price"],
                user_id=user_id,
            )

        return result

    def _checkout_lines(self, user_id: int, address_id: int):
        placed: List[Dict[str, Any]] = []
        total_order_price = Decimal("0.00")

        try:
            # re-read under the lock
            items = self.carts.get_cart_items(user_id)
            if not items:
                self.db.rollback()
                return OrderResult.failure(OrderError.EMPTY_CART, "There is nothing in the cart"), []

            for item in items:
                item_id, book_id, quantity = item.id, item.book_id, item.quantity

                book: BookModel | None = self.books.get_book(book_id)
                if not book:
                    self.db.rollback()
                    logger.error(f"Book {book_id} from cart item {item_id} is not available")
                    return OrderResult.failure(
                        OrderError.BOOK_NOT_FOUND, "We do not have this book in the store"
                    ), []

                if book.quantity < quantity:
                    self.db.rollback()
                    logger.error(f"Stock for book {book_id} is not available ({book.quantity} < {quantity})")
                    return OrderResult.failure(
                        OrderError.INSUFFICIENT_STOCK, "This much stock is unavailable for the book"
                    ), []

                line_total = book.price * quantity
                book_name, book_author = book.name, book.author

                if not self.books.decrement_quantity(book_id, quantity):
                    self.db.rollback()
                    logger.warning(f"Book {book_id} sold out before the cart was committed")
                    return OrderResult.failure(
                        OrderError.INSUFFICIENT_STOCK, "This much stock is unavailable for the book"
                    ), []

                order = self.orders.create_order(
                    user_id=user_id,
                    book_id=book_id,
                    address_id=address_id,
                    quantity=quantity,
                    total_price=line_total,
                )

                if not self.carts.delete_cart_item(item_id):
                    self.db.rollback()
                    logger.warning(f"Cart item {item_id} was consumed by another checkout")
                    return OrderResult.failure(
                        OrderError.CHECKOUT_CONFLICT, "Checkout for this cart is already in progress"
                    ), []

                total_order_price += line_total
                placed.append(
                    {
                        "order_id": order.order_id,
                        "book_id": book_id,
                        "book_name": book_name,
                        "book_author": book_author,
                        "quantity": quantity,
                        "total_price": line_total,
                    }
                )

            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"Checkout for user {user_id} failed")
            raise

        logger.info(
            f"Cart of user {user_id} checked out: {len(placed)} orders, total {total_order_price}"
        )

        return OrderResult.success(
            {
                "total_price": total_order_price,
                "orders": [
                    {
                        "order_id": line["order_id"],
                        "book_id": line["book_id"],
                        "quantity": line["quantity"],
                        "total_price": line["total_price"],
                    }
                    for line in placed
                ],
            }
        ), placed

    def _release_lock(self, user_id: int, token: str):
        try:
            self.lock_service.release_checkout_lock(user_id, token)
        except RedisError as e:
            # lock expires by TTL anyway
            logger.warning(f"Failed to release checkout lock for user {user_id}: {e}")

    # queries
    def get_order(self, order_id: str, user_id: int) -> Dict[str, Any]:
        order = self.orders.get_order(order_id)

        if not order:
            raise LookupError("Order does not exist")

        if order.user_id != user_id:
            raise PermissionError("No access to this order")

        return self._to_dict(order)

    def list_orders(self, user_id: int) -> List[Dict[str, Any]]:
        return [self._to_dict(o) for o in self.orders.list_orders_for_user(user_id)]

    @staticmethod
    def _to_dict(order: OrderModel) -> Dict[str, Any]:
        return {
            "order_id": order.order_id,
            "user_id": order.user_id,
            "book_id": order.book_id,
            "address_id": order.address_id,
            "quantity": order.quantity,
            "total_price": order.total_price,
            "created_at": order.created_at,
        }
