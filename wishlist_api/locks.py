"""
Per-wishlist mutual exclusion for item re-sequencing.

Uses a Redis lock when REDIS_URL is configured so that every worker process
shares the same scope. Without Redis (or when it cannot be reached) an
in-process lock registry is used instead, which only serializes requests
handled by the current process.
"""

import logging
import weakref
from contextlib import contextmanager
from threading import Lock
from typing import Optional

import redis
from redis.exceptions import LockError, RedisError

from .config import REDIS_URL, SORT_LOCK_TIMEOUT, SORT_LOCK_WAIT
from .exceptions import ConcurrentModification, StoreUnavailable

logger = logging.getLogger(__name__)

redis_client: Optional[redis.Redis] = None
_redis_disabled = False

# In-process fallback: {key: Lock}; an entry lives only while a holder or waiter references it
_local_locks: "weakref.WeakValueDictionary[str, Lock]" = weakref.WeakValueDictionary()
_registry_lock = Lock()


def get_redis_client() -> Optional[redis.Redis]:
    """
    Get or create the Redis client.
    Returns None when Redis is not configured or the first connection failed.
    """
    global redis_client, _redis_disabled

    if redis_client is not None or _redis_disabled:
        return redis_client

    if not REDIS_URL:
        logger.warning("⚠️ REDIS_URL not set - sort locks are process-local")
        _redis_disabled = True
        return None

    # Mask password in URL for logging
    if "@" in REDIS_URL:
        url_parts = REDIS_URL.split("@")
        protocol = url_parts[0].split(":")[0]
        masked_url = f"{protocol}:****@{url_parts[1]}"
    else:
        masked_url = "****"
    logger.info(f"🔄 Connecting to Redis for sort locks: {masked_url}")

    try:
        client = redis.from_url(
            REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=10,
            retry_on_timeout=True,
            health_check_interval=30,
        )
        client.ping()
    except RedisError as e:
        logger.error(f"❌ Failed to connect to Redis: {e}")
        logger.warning("⚠️ Falling back to process-local sort locks")
        _redis_disabled = True
        return None

    redis_client = client
    logger.info("✅ Redis connected successfully")
    return redis_client


def reset_redis_client() -> None:
    """Forget the cached client so the next call reconnects"""
    global redis_client, _redis_disabled
    redis_client = None
    _redis_disabled = False


def _local_lock(key: str) -> Lock:
    with _registry_lock:
        lock = _local_locks.get(key)
        if lock is None:
            lock = _local_locks[key] = Lock()
        return lock


@contextmanager
def collection_lock(key: str, timeout: float = SORT_LOCK_TIMEOUT, wait: float = SORT_LOCK_WAIT):
    """
    Hold the exclusion scope for one ordered collection.

    Raises ConcurrentModification if the scope cannot be acquired within
    `wait` seconds, and StoreUnavailable if Redis fails while locking.
    """
    client = get_redis_client()

    if client is not None:
        lock = client.lock(f"lock:{key}", timeout=timeout, blocking_timeout=wait)
        try:
            acquired = lock.acquire()
        except RedisError as e:
            logger.error(f"❌ Redis lock error for {key}: {e}")
            raise StoreUnavailable(f"Lock store unavailable for {key}") from e
        if not acquired:
            logger.warning(f"⚠️ Timed out waiting for lock {key}")
            raise ConcurrentModification(f"{key} is being reordered by another request")
        try:
            yield
        finally:
            try:
                lock.release()
            except LockError:
                # Expired before release; the next holder already owns it
                logger.warning(f"⚠️ Lock {key} expired before release")
        return

    lock = _local_lock(key)
    if not lock.acquire(timeout=wait):
        logger.warning(f"⚠️ Timed out waiting for lock {key}")
        raise ConcurrentModification(f"{key} is being reordered by another request")
    try:
        yield
    finally:
        lock.release()
