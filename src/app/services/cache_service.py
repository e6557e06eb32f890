"""Cache Service Interface

Best-effort cache for computed reports. Correctness never depends on it:
a miss simply recomputes.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


def build_cache_key(prefix: str, params: Optional[Dict[str, Any]] = None) -> str:
    """Stable key made of a prefix and the params sorted by name"""
    if not params:
        return prefix
    parts = [f"{name}={params[name]}" for name in sorted(params)]
    return f"{prefix}:" + "&".join(parts)


class CacheService(ABC):
    """Key/value cache with expiry"""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        pass

    @abstractmethod
    def invalidate(self, prefix: Optional[str] = None) -> None:
        """Drop entries starting with prefix, or everything when prefix is None"""
        pass
