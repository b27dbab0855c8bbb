"""
Tiling of free intervals into fixed-duration candidate slots.
"""

import logging
from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from .time_window import TimeWindow

logger = logging.getLogger(__name__)


class SlotGenerator:
    """
    Generates duration-exact candidate slots from free intervals.

    Slots start at each interval's start and advance by ``step_minutes``
    (the duration when not given). A remainder shorter than the duration is
    discarded.
    """

    def __init__(self, step_minutes: Optional[int] = None):
        if step_minutes is not None and step_minutes <= 0:
            raise ValueError("step_minutes must be positive")
        self.step_minutes = step_minutes

    def generate(
        self,
        intervals: Iterable[TimeWindow],
        duration_minutes: int,
        not_before: Optional[datetime] = None,
    ) -> List[TimeWindow]:
        """
        Tile free intervals with candidate slots.

        Args:
            intervals: Free windows
            duration_minutes: Exact slot length
            not_before: Drop slots starting before this instant

        Returns:
            Slots sorted by start, unique by (start, end)
        """
        duration = timedelta(minutes=duration_minutes)
        step = timedelta(minutes=self.step_minutes or duration_minutes)

        seen = set()
        slots = []
        for interval in intervals:
            start = interval.start
            while start + duration <= interval.end:
                slot = TimeWindow(start, start + duration)
                if (not_before is None or slot.start >= not_before) and slot not in seen:
                    seen.add(slot)
                    slots.append(slot)
                start += step

        slots.sort(key=lambda slot: (slot.start, slot.end))
        logger.debug(f"Generated {len(slots)} slots of {duration_minutes} minutes")
        return slots
