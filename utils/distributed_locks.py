"""
Cache-backed locks serializing writes to a user's schedule.

A session write reads the schedule (conflict check) and then writes it, so two
concurrent writes for the same user must not interleave. The lock lives in
the shared cache (Redis in production) so it holds across worker processes.
"""

import functools
import inspect
import logging
import time
import uuid
from contextlib import contextmanager

from django.conf import settings
from django.core.cache import cache

from core.exceptions import LockTimeoutException
from utils.constants import SCHEDULE_LOCK_EXPIRES, SCHEDULE_LOCK_TIMEOUT

logger = logging.getLogger(__name__)

LOCK_KEY_PREFIX = "planner:lock:"


class ScheduleLock:
    """Exclusive lock on one cache key, owned by a random token."""

    def __init__(
        self,
        name: str,
        expires: int = SCHEDULE_LOCK_EXPIRES,
        timeout: int = SCHEDULE_LOCK_TIMEOUT,
        poll_interval: float = 0.05,
    ):
        """
        Args:
            name: Lock name, e.g. "schedule:user:42"
            expires: Seconds after which a crashed holder's lock is dropped
            timeout: Seconds to wait before giving up
            poll_interval: Seconds between attempts
        """
        self.key = f"{LOCK_KEY_PREFIX}{name}"
        self.expires = expires
        self.timeout = timeout
        self.poll_interval = poll_interval
        self.token = uuid.uuid4().hex

    def acquire(self) -> bool:
        deadline = time.monotonic() + self.timeout

        # cache.add only writes when the key is absent
        while not cache.add(self.key, self.token, self.expires):
            if time.monotonic() >= deadline:
                logger.warning(f"Timed out after {self.timeout}s waiting for {self.key}")
                return False
            time.sleep(self.poll_interval)

        logger.debug(f"Acquired {self.key}")
        return True

    def release(self) -> bool:
        if cache.get(self.key) != self.token:
            # Expired and possibly taken by another writer
            logger.warning(f"Lock {self.key} expired before release")
            return False

        cache.delete(self.key)
        logger.debug(f"Released {self.key}")
        return True


@contextmanager
def schedule_lock(name, expires=SCHEDULE_LOCK_EXPIRES, timeout=SCHEDULE_LOCK_TIMEOUT):
    """
    Hold a ScheduleLock for the duration of the block.

    Raises:
        LockTimeoutException: If the lock is still held elsewhere after timeout
    """
    lock = ScheduleLock(name, expires=expires, timeout=timeout)
    if not lock.acquire():
        raise LockTimeoutException()
    try:
        yield lock
    finally:
        lock.release()


def lock_setting(name, default):
    """Lock timing from settings, read per call so it can be overridden"""
    return getattr(settings, name, default)


def with_distributed_lock(name_template, expires=None, timeout=None):
    """
    Run the decorated function under a schedule lock.

    Args:
        name_template: Lock name formatted with the call's arguments by
            parameter name, e.g. "schedule:user:{user.pk}"
        expires: Lock expiry in seconds, defaults to settings.SCHEDULE_LOCK_EXPIRES
        timeout: Seconds to wait for the lock, defaults to
            settings.SCHEDULE_LOCK_TIMEOUT

    Returns:
        callable: The decorated function
    """

    def decorator(func):
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            bound = signature.bind(*args, **kwargs)
            name = name_template.format(**bound.arguments)

            lock_expires = expires
            if lock_expires is None:
                lock_expires = lock_setting("SCHEDULE_LOCK_EXPIRES", SCHEDULE_LOCK_EXPIRES)
            lock_timeout = timeout
            if lock_timeout is None:
                lock_timeout = lock_setting("SCHEDULE_LOCK_TIMEOUT", SCHEDULE_LOCK_TIMEOUT)

            with schedule_lock(name, expires=lock_expires, timeout=lock_timeout):
                return func(*args, **kwargs)

        return wrapper

    return decorator
