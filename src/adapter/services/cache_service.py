"""In-process TTL cache for reports"""

import logging
import threading
from typing import Any, Optional
from cachetools import TTLCache
from src.app.services.cache_service import CacheService

logger = logging.getLogger(__name__)


class TTLCacheService(CacheService):
    """
    CacheService backed by cachetools.TTLCache

    Entries expire after ttl_seconds; the oldest are evicted once maxsize
    is reached. A lock guards the cache since TTLCache is not thread-safe.
    """

    def __init__(self, ttl_seconds: int = 300, maxsize: int = 256):
        self.cache = TTLCache(maxsize=maxsize, ttl=ttl_seconds)
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            value = self.cache.get(key)
        if value is not None:
            logger.debug(f"Cache hit for {key}")
        return value

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self.cache[key] = value

    def invalidate(self, prefix: Optional[str] = None) -> None:
        with self._lock:
            if prefix is None:
                self.cache.clear()
                return
            for key in [key for key in self.cache.keys() if key.startswith(prefix)]:
                self.cache.pop(key, None)
