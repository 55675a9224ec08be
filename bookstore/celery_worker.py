# bookstore/celery_worker.py
from celery import Celery

from bookstore.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND

celery_app = Celery(
    "bookstore",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# tasks imported explicitly so the worker registers them
celery_app.conf.imports = (
    "bookstore.services.notification_service",
)

celery_app.conf.timezone = "UTC"
