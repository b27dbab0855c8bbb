"""
Clock sources.

Code that needs "now" takes a clock instead of calling the current-time API
directly, so tests can pin time.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from django.utils import timezone


class Clock(ABC):
    """Source of the current instant."""

    @abstractmethod
    def now(self) -> datetime:
        """Current timezone-aware instant"""


class SystemClock(Clock):
    """Wall clock backed by Django's timezone-aware now()."""

    def now(self) -> datetime:
        return timezone.now()


class FixedClock(Clock):
    """Clock pinned to a single instant."""

    def __init__(self, instant: datetime):
        if timezone.is_naive(instant):
            raise ValueError("FixedClock requires a timezone-aware datetime")
        self.instant = instant

    def now(self) -> datetime:
        return self.instant
