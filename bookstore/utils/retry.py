# bookstore/utils/retry.py
import logging

import redis
import requests
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from bookstore.utils.logging import get_logger

logger = get_logger(__name__)


def _retrying(exc_types, attempts: int, multiplier: float, max_wait: float):
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=multiplier, min=multiplier, max=max_wait),
        retry=retry_if_exception_type(exc_types),
        before_sleep=before_sleep_log(logger, logging.WARNING),
    )


# webhook calls from the celery worker
def http_retry(attempts: int = 3):
    return _retrying(requests.RequestException, attempts, multiplier=0.3, max_wait=3)


# checkout lock calls, run inside the request
def redis_retry(attempts: int = 3):
    return _retrying(redis.RedisError, attempts, multiplier=0.2, max_wait=2)
