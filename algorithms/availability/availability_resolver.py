"""
Expansion of recurring weekly availability into concrete instants.

Weekly windows are expressed in the user's wall-clock time. Each date in the
look-ahead horizon is resolved in the user's IANA timezone and then converted
to UTC, so a window keeps its local hours across DST transitions.
"""

import logging
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Tuple

import pytz

from utils.constants import WEEKDAY_CODES

from .time_window import TimeWindow, merge_windows

logger = logging.getLogger(__name__)


def get_timezone(timezone_name: str):
    """
    Resolve an IANA timezone name.

    Raises:
        ValueError: If the name is not a known timezone
    """
    try:
        return pytz.timezone(timezone_name)
    except pytz.UnknownTimeZoneError as e:
        raise ValueError(f"Unknown timezone: {timezone_name}") from e


def weekday_code(day: date) -> str:
    """Weekday code (MON..SUN) for a calendar date."""
    return WEEKDAY_CODES[day.weekday()]


def localize(day: date, wall_time, tz) -> datetime:
    """Attach the user's timezone to a local date/time and convert to UTC."""
    local = tz.localize(datetime.combine(day, wall_time))
    return local.astimezone(pytz.UTC)


class AvailabilityResolver:
    """
    Expands weekly availability windows over a look-ahead horizon.

    Windows on the same weekday may overlap; they are merged after expansion.
    """

    def __init__(self, timezone_name: str = "UTC"):
        self.timezone_name = timezone_name
        self.tz = get_timezone(timezone_name)

    def horizon(self, now: datetime, look_ahead_days: int) -> Tuple[date, datetime, datetime]:
        """
        Compute the horizon ``[today, today + look_ahead_days)`` for ``now``.

        Args:
            now: Current instant (timezone-aware)
            look_ahead_days: Number of calendar days in the horizon

        Returns:
            Tuple of (first local date, horizon start in UTC, horizon end in UTC)
        """
        today = now.astimezone(self.tz).date()
        last = today + timedelta(days=look_ahead_days)
        start = localize(today, datetime.min.time(), self.tz)
        end = localize(last, datetime.min.time(), self.tz)
        return today, start, end

    def resolve(
        self,
        windows: Iterable[Dict[str, Any]],
        start_date: date,
        look_ahead_days: int,
    ) -> List[TimeWindow]:
        """
        Instantiate weekly windows on every date of the horizon.

        Args:
            windows: Dicts with 'day_of_week' (MON..SUN), 'start_time' and
                'end_time' (local ``datetime.time`` values)
            start_date: First local calendar date of the horizon
            look_ahead_days: Number of dates to expand

        Returns:
            Concrete UTC windows sorted by start; days without windows
            contribute nothing
        """
        by_weekday = defaultdict(list)
        for window in windows:
            by_weekday[window["day_of_week"]].append(window)

        concrete = []
        for offset in range(look_ahead_days):
            day = start_date + timedelta(days=offset)
            for window in by_weekday.get(weekday_code(day), []):
                start = localize(day, window["start_time"], self.tz)
                end = localize(day, window["end_time"], self.tz)
                if end <= start:
                    # Wall-clock window collapsed by a DST transition
                    logger.debug(
                        f"Skipping collapsed window on {day} "
                        f"{window['start_time']}-{window['end_time']} ({self.timezone_name})"
                    )
                    continue
                concrete.append(TimeWindow(start, end))

        return merge_windows(concrete)
