# bookstore/services/notification_service.py
from decimal import Decimal

import requests

from bookstore.celery_worker import celery_app
from bookstore.data.database import SessionLocal
from bookstore.repos.user_repo import UserRepo
from bookstore.utils.retry import http_retry
from bookstore.utils.settings import NOTIFICATION_DELAY_SECONDS, NOTIFICATION_WEBHOOK_URL
from bookstore.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Order notifications (mail with the order details).
    Enqueued to Celery with a countdown, never awaited by the request.
    """

    def __init__(self, delay: int | None = None):
        self.delay = NOTIFICATION_DELAY_SECONDS if delay is None else delay

    def send_order_notification(
        self,
        order_id: str,
        book_name: str,
        book_author: str,
        quantity: int,
        total_price: Decimal,
        user_id: int,
    ) -> bool:
        """
        Best effort: a broker failure is logged and reported as False,
        the order it describes stays committed.
        """
        try:
            send_order_notification_task.apply_async(
                kwargs={
                    "order_id": order_id,
                    "book_name": book_name,
                    "book_author": book_author,
                    "quantity": quantity,
                    "total_price": str(total_price),
                    "user_id": user_id,
                },
                countdown=self.delay,
            )
        except Exception:
            logger.exception(f"Could not enqueue notification for order {order_id}")
            return False

        logger.info(f"Notification for order {order_id} queued, delay {self.delay}s")
        return True


def build_order_message(
    order_id: str,
    book_name: str,
    book_author: str,
    quantity: int,
    total_price: str,
    recipient: str | None,
) -> dict:
    return {
        "to": recipient,
        "subject": f"Your order {order_id} has been placed",
        "body": (
            f"Order id: {order_id}\n"
            f"Book: {book_name} by {book_author}\n"
            f"Quantity: {quantity}\n"
            f"Total price: {total_price}"
        ),
    }


@http_retry()
def _post_message(url: str, message: dict):
    resp = requests.post(url, json=message, timeout=5)
    resp.raise_for_status()


@celery_app.task(name="bookstore.services.notification_service.send_order_notification_task")
def send_order_notification_task(
    order_id: str,
    book_name: str,
    book_author: str,
    quantity: int,
    total_price: str,
    user_id: int,
):
    db = SessionLocal()
    try:
        user = UserRepo(db).get_user(user_id)
        recipient = user.email if user else None
    finally:
        db.close()

    message = build_order_message(order_id, book_name, book_author, quantity, total_price, recipient)

    if not NOTIFICATION_WEBHOOK_URL:
        logger.info(f"[NOTIFICATION] User {user_id}: {message['subject']}")
        return {"order_id": order_id, "user_id": user_id, "status": "logged"}

    _post_message(NOTIFICATION_WEBHOOK_URL, message)
    logger.info(f"[NOTIFICATION] Order {order_id} delivered to {recipient}")
    return {"order_id": order_id, "user_id": user_id, "status": "sent"}
