# bookstore/services/lock_service.py
import redis

from bookstore.utils.retry import redis_retry
from bookstore.utils.settings import CHECKOUT_LOCK_TTL_SECONDS, REDIS_URL
from bookstore.utils.logging import get_logger

logger = get_logger(__name__)

CHECKOUT_KEY = "checkout:{user_id}:lock"

# KEYS[1] lock key, ARGV[1] token of the holder
RELEASE_IF_HELD = """
if redis.call('GET', KEYS[1]) ~= ARGV[1] then
    return 0
end
return redis.call('DEL', KEYS[1])
"""


class LockService:
    """
    Serialises checkouts of one user's cart across workers.

    The token given to acquire_checkout_lock must be passed back to release it,
    a checkout whose lock already expired cannot free the lock of the next one.
    """

    def __init__(self, url: str | None = None):
        self.redis = redis.Redis.from_url(url or REDIS_URL, decode_responses=True)
        self._release_script = None

    @redis_retry()
    def acquire_checkout_lock(
        self, user_id: int, token: str, ttl: int = CHECKOUT_LOCK_TTL_SECONDS
    ) -> bool:
        key = CHECKOUT_KEY.format(user_id=user_id)
        acquired = bool(self.redis.set(key, token, nx=True, ex=ttl))
        logger.info(f"Checkout lock {key} {'taken' if acquired else 'busy'} (ttl {ttl}s)")
        return acquired

    @redis_retry()
    def release_checkout_lock(self, user_id: int, token: str) -> bool:
        key = CHECKOUT_KEY.format(user_id=user_id)
        released = bool(self._release()(keys=[key], args=[token]))
        if not released:
            logger.warning(f"Checkout lock {key} was no longer held by this checkout")
        return released

    def _release(self):
        # registered on first use, EVALSHA after the first call
        if self._release_script is None:
            self._release_script = self.redis.register_script(RELEASE_IF_HELD)
        return self._release_script
