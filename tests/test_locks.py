"""Tests for the per-wishlist lock"""

import gc
import threading

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from wishlist_api import locks
from wishlist_api.exceptions import ConcurrentModification, StoreUnavailable


def try_lock_in_thread(key, wait=0.05):
    result = {}

    def contender():
        try:
            with locks.collection_lock(key, wait=wait):
                result["acquired"] = True
        except ConcurrentModification:
            result["acquired"] = False

    thread = threading.Thread(target=contender)
    thread.start()
    thread.join()
    return result["acquired"]


def test_no_redis_configured():
    assert locks.get_redis_client() is None


def test_held_lock_blocks_same_key():
    with locks.collection_lock("wishlist:1", wait=0.05):
        assert try_lock_in_thread("wishlist:1") is False


def test_held_lock_does_not_block_other_keys():
    with locks.collection_lock("wishlist:1", wait=0.05):
        assert try_lock_in_thread("wishlist:2") is True


def test_lock_is_released_after_block():
    with locks.collection_lock("wishlist:3", wait=0.05):
        pass
    assert try_lock_in_thread("wishlist:3") is True


def test_lock_is_released_when_block_raises():
    with pytest.raises(RuntimeError):
        with locks.collection_lock("wishlist:4", wait=0.05):
            raise RuntimeError("boom")
    assert try_lock_in_thread("wishlist:4") is True


def test_idle_locks_are_dropped():
    with locks.collection_lock("wishlist:5", wait=0.05):
        assert "wishlist:5" in locks._local_locks
    gc.collect()
    assert "wishlist:5" not in locks._local_locks


def test_many_keys_do_not_accumulate():
    keys = {f"wishlist:{wishlist_id}" for wishlist_id in range(100, 150)}
    for key in keys:
        with locks.collection_lock(key, wait=0.05):
            pass
    gc.collect()
    assert keys.isdisjoint(locks._local_locks.keys())


class FakeRedisLock:
    def __init__(self, acquired):
        self.acquired = acquired
        self.released = False

    def acquire(self):
        if isinstance(self.acquired, Exception):
            raise self.acquired
        return self.acquired

    def release(self):
        self.released = True


class FakeRedis:
    def __init__(self, acquired=True):
        self.lock_obj = FakeRedisLock(acquired)
        self.lock_calls = []

    def lock(self, name, timeout=None, blocking_timeout=None):
        self.lock_calls.append((name, timeout, blocking_timeout))
        return self.lock_obj


def test_redis_lock_used_when_available(monkeypatch):
    fake = FakeRedis()
    monkeypatch.setattr(locks, "get_redis_client", lambda: fake)

    with locks.collection_lock("wishlist:7", timeout=3, wait=1):
        assert fake.lock_obj.released is False

    assert fake.lock_calls == [("lock:wishlist:7", 3, 1)]
    assert fake.lock_obj.released is True


def test_redis_lock_timeout_raises(monkeypatch):
    fake = FakeRedis(acquired=False)
    monkeypatch.setattr(locks, "get_redis_client", lambda: fake)

    with pytest.raises(ConcurrentModification) as exc_info:
        with locks.collection_lock("wishlist:8", wait=0.01):
            pytest.fail("lock body must not run")

    assert exc_info.value.status_code == 409
    assert fake.lock_obj.released is False


def test_redis_failure_reports_store_unavailable(monkeypatch):
    fake = FakeRedis(acquired=RedisConnectionError("connection refused"))
    monkeypatch.setattr(locks, "get_redis_client", lambda: fake)

    with pytest.raises(StoreUnavailable) as exc_info:
        with locks.collection_lock("wishlist:9", wait=0.01):
            pytest.fail("lock body must not run")

    assert exc_info.value.status_code == 503
