"""
Rate cache

Get-or-compute storage for quotes. A compute result of None is handed back
to the caller but never stored, so a failed DHL call is retried on the
next request instead of being pinned for the whole TTL.
"""

import logging
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)


class RateCache(ABC):
    """Base class for quote caches"""

    @abstractmethod
    async def fetch_or_compute(
        self,
        key: str,
        ttl: int,
        compute: Callable[[], Awaitable[Optional[Any]]]
    ) -> Optional[Any]:
        """Return the cached value for key, or await compute() and store a non-None result

        Args:
            key: Cache key
            ttl: Lifetime of a stored value in seconds
            compute: Zero-argument coroutine function producing the value on a miss

        Returns:
            Cached or freshly computed value (None is never stored)
        """
        pass


class InMemoryRateCache(RateCache):
    """
    Process-local rate cache with per-entry expiry.

    Expired entries are dropped when read and swept on every store, so keys
    from previous days do not accumulate.

    The lock only guards dictionary access and is never held while
    compute() runs, so two concurrent misses on the same key may both
    call DHL. That is acceptable; the later result simply overwrites the
    earlier one.
    """

    def __init__(self):
        self._entries: Dict[str, Tuple[Any, datetime]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        """Get a value if present and not expired"""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            value, expires_at = entry
            if datetime.now() >= expires_at:
                del self._entries[key]
                logger.debug(f"Cache entry expired: {key}")
                return None

            return value

    def set(self, key: str, value: Any, ttl: int) -> None:
        """Store a value for ttl seconds. None values are ignored."""
        if value is None:
            return

        now = datetime.now()
        with self._lock:
            self._purge_expired(now)
            self._entries[key] = (value, now + timedelta(seconds=ttl))

    def _purge_expired(self, now: datetime) -> None:
        """Drop every expired entry. Caller must hold the lock."""
        expired = [key for key, (_, expires_at) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug(f"Purged {len(expired)} expired cache entries")

    async def fetch_or_compute(
        self,
        key: str,
        ttl: int,
        compute: Callable[[], Awaitable[Optional[Any]]]
    ) -> Optional[Any]:
        cached = self.get(key)
        if cached is not None:
            logger.debug(f"Cache hit: {key}")
            return cached

        logger.debug(f"Cache miss: {key}")
        value = await compute()
        self.set(key, value, ttl)
        return value

    def clear(self) -> None:
        """Drop every cached entry"""
        with self._lock:
            self._entries.clear()
        logger.info("Cleared rate cache")

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
