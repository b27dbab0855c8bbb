import logging
import math
from collections import Counter, defaultdict
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from utils.constants import (
    MIN_PATTERN_FREQUENCY,
    MIN_PREFERENCE_SAMPLES,
    MIN_PREFERENCE_SHARE,
    NIGHT,
    PARTS_OF_DAY,
    PATTERN_EXCLUDED_TYPES,
    PATTERN_TIME_ROUNDING_MINUTES,
    RECENCY_HALF_LIFE_DAYS,
    WEEKDAY_CODES,
)

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60


def part_of_day(hour: int) -> str:
    """Name of the part of day (morning, afternoon, evening, night) for a local hour."""
    for name, start_hour, end_hour in PARTS_OF_DAY:
        if start_hour <= hour < end_hour:
            return name
    return NIGHT


def minute_of_day(moment: datetime) -> int:
    return moment.hour * 60 + moment.minute


class PatternDetector:
    """
    Detects recurring habits in a user's completed sessions.

    A pattern is a (weekday, time-of-day bucket) pair at which the user has
    completed sessions of a type at least ``min_frequency`` times. Each
    occurrence is weighted by recency with an exponential half-life, so a
    habit that stopped months ago fades out.
    """

    def __init__(
        self,
        min_frequency: int = MIN_PATTERN_FREQUENCY,
        rounding_minutes: int = PATTERN_TIME_ROUNDING_MINUTES,
        half_life_days: float = RECENCY_HALF_LIFE_DAYS,
    ):
        """
        Initialize the detector.

        Args:
            min_frequency: Minimum occurrences for a bucket to count as a pattern
            rounding_minutes: Size of the time-of-day bucket
            half_life_days: Age at which an occurrence counts half
        """
        self.min_frequency = min_frequency
        self.rounding_minutes = rounding_minutes
        self.half_life_days = half_life_days

    def history(
        self, sessions: Iterable[Dict[str, Any]], session_type: str, now: datetime
    ) -> List[Dict[str, Any]]:
        """Completed, non-deleted sessions of the given type that started before now."""
        return [
            session
            for session in sessions
            if session.get("deleted_at") is None
            and session.get("completed")
            and session["type"] == session_type
            and session["start_time"] < now
        ]

    def recency_weight(self, moment: datetime, now: datetime) -> float:
        """Exponential decay weight, 1.0 for an occurrence happening now."""
        age_days = max(0.0, (now - moment).total_seconds() / 86400)
        return math.pow(2, -age_days / self.half_life_days)

    def _bucket(self, minutes: int) -> int:
        half = self.rounding_minutes // 2
        bucket = ((minutes + half) // self.rounding_minutes) * self.rounding_minutes
        return min(bucket, MINUTES_PER_DAY - self.rounding_minutes)

    def detect(
        self,
        sessions: Iterable[Dict[str, Any]],
        session_type: str,
        tz,
        now: datetime,
    ) -> List[Dict[str, Any]]:
        """
        Detect weekly patterns for a session type.

        Args:
            sessions: The user's sessions as dictionaries
            session_type: Session type to analyse
            tz: The user's pytz timezone
            now: Current instant

        Returns:
            Patterns sorted by weighted frequency (strongest first), each with:
            - weekday: MON..SUN
            - minute_of_day: Bucketed local start time in minutes
            - frequency: Number of occurrences
            - weighted_frequency: Recency-weighted occurrences
            - title: Most common title among occurrences
        """
        if session_type in PATTERN_EXCLUDED_TYPES:
            return []

        groups = defaultdict(list)
        for session in self.history(sessions, session_type, now):
            local_start = session["start_time"].astimezone(tz)
            key = (WEEKDAY_CODES[local_start.weekday()], self._bucket(minute_of_day(local_start)))
            groups[key].append(session)

        patterns = []
        for (weekday, bucket), members in groups.items():
            if len(members) < self.min_frequency:
                continue

            titles = Counter(member.get("title") or "" for member in members)
            # Ties broken alphabetically
            title = sorted(titles.items(), key=lambda item: (-item[1], item[0]))[0][0]

            patterns.append(
                {
                    "weekday": weekday,
                    "minute_of_day": bucket,
                    "frequency": len(members),
                    "weighted_frequency": sum(
                        self.recency_weight(member["start_time"], now) for member in members
                    ),
                    "title": title or None,
                }
            )

        patterns.sort(
            key=lambda p: (
                -p["weighted_frequency"],
                WEEKDAY_CODES.index(p["weekday"]),
                p["minute_of_day"],
            )
        )
        logger.debug(f"Detected {len(patterns)} patterns for {session_type}")
        return patterns

    def time_of_day_preference(
        self,
        sessions: Iterable[Dict[str, Any]],
        session_type: str,
        tz,
        now: datetime,
    ) -> Optional[Dict[str, Any]]:
        """
        Infer the preferred part of day for a session type.

        Returns:
            Dict with 'part_of_day', 'share' and 'samples', or None when the
            history is too thin or too spread out to infer a preference
        """
        history = self.history(sessions, session_type, now)
        if len(history) < MIN_PREFERENCE_SAMPLES:
            return None

        parts = Counter(part_of_day(session["start_time"].astimezone(tz).hour) for session in history)
        part, count = sorted(parts.items(), key=lambda item: (-item[1], item[0]))[0]
        share = count / len(history)
        if share < MIN_PREFERENCE_SHARE:
            return None

        return {"part_of_day": part, "share": share, "samples": len(history)}
