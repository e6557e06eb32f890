from .unit_of_work import UnitOfWork
from .notification_service import NotificationService
from .cache_service import CacheService, build_cache_key

__all__ = [
    "UnitOfWork",
    "NotificationService",
    "CacheService",
    "build_cache_key",
]
