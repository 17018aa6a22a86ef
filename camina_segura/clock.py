"""
Wall-clock sources for time-of-day scoring and report ages.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from .data.models import ensure_aware


class Clock(ABC):

    @abstractmethod
    def now(self) -> datetime:
        """Current time as an aware datetime in the user's local zone."""
        pass


class SystemClock(Clock):

    def now(self) -> datetime:
        return datetime.now().astimezone()


class FixedClock(Clock):
    """A clock frozen at one instant; naive datetimes are taken as UTC."""

    def __init__(self, current: datetime):
        self.current = ensure_aware(current)

    def now(self) -> datetime:
        return self.current

    def set(self, current: datetime) -> None:
        self.current = ensure_aware(current)
