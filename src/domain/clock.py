"""Injectable time source

Every "now"/"today" read in the billing rules goes through a Clock so the
due checks, sweeps and start-date validation can be pinned in tests.
All values are naive UTC, matching the timestamps stored on entities.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from src.domain.base import utc_now


class Clock(ABC):
    """Source of the current time"""

    @abstractmethod
    def now(self) -> datetime:
        pass

    def today(self) -> date:
        return self.now().date()


class SystemClock(Clock):
    """Wall clock, used in production"""

    def now(self) -> datetime:
        return utc_now()


class FixedClock(Clock):
    """
    Clock frozen at a given instant

    Args:
        current: Instant to report; a date is promoted to midnight
    """

    def __init__(self, current):
        if not isinstance(current, datetime):
            current = datetime.combine(current, datetime.min.time())
        self.current = current

    def now(self) -> datetime:
        return self.current

    def set(self, current) -> None:
        if not isinstance(current, datetime):
            current = datetime.combine(current, datetime.min.time())
        self.current = current
