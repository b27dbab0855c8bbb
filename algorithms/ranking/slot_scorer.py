import logging
import math
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from algorithms.availability.time_window import TimeWindow
from utils.constants import (
    DEFAULT_SCORING_WEIGHTS,
    HEURISTIC_FIRE_THRESHOLD,
    IDEAL_SPACING_HOURS,
    MAX_PRIORITY,
    MIN_SESSION_SPACING_HOURS,
    PATTERN_MATCH_WINDOW_MINUTES,
    PATTERN_SATURATION,
    SESSION_TYPE_LABELS,
    SOON_DAYS_THRESHOLD,
    WEEKDAY_CODES,
    WEEKDAY_NAMES,
)

from .pattern_detector import minute_of_day, part_of_day

logger = logging.getLogger(__name__)


def clamp_points(value: float, cap: float) -> int:
    """Round half up and clamp to [0, cap]."""
    return int(max(0, min(cap, math.floor(value + 0.5))))


class SlotScorer:
    """
    Scores candidate slots on a 0-100 scale with human-readable reasons.

    The score is a sum of four independent heuristics, each clamped to its own
    sub-range:
    1. Pattern alignment with the user's recurring habits
    2. Spacing from other sessions of the same type
    3. Urgency: high-priority requests placed early in the horizon
    4. Time-of-day preference inferred from completed history

    A heuristic contributes points and exactly one reason only when it reaches
    ``fire_threshold`` points.
    """

    def __init__(
        self,
        pattern_weight: float = DEFAULT_SCORING_WEIGHTS["pattern"],
        spacing_weight: float = DEFAULT_SCORING_WEIGHTS["spacing"],
        urgency_weight: float = DEFAULT_SCORING_WEIGHTS["urgency"],
        time_of_day_weight: float = DEFAULT_SCORING_WEIGHTS["time_of_day"],
        fire_threshold: int = HEURISTIC_FIRE_THRESHOLD,
    ):
        """
        Initialize the scorer with configurable sub-range caps.

        Args:
            pattern_weight: Maximum points for matching a recurring habit
            spacing_weight: Maximum points for distance to same-type sessions
            urgency_weight: Maximum points for early high-priority placement
            time_of_day_weight: Maximum points for the preferred part of day
            fire_threshold: Minimum points for a heuristic to count
        """
        weights = (pattern_weight, spacing_weight, urgency_weight, time_of_day_weight)
        if any(weight < 0 for weight in weights):
            raise ValueError("Scoring weights must be non-negative")

        self.pattern_weight = pattern_weight
        self.spacing_weight = spacing_weight
        self.urgency_weight = urgency_weight
        self.time_of_day_weight = time_of_day_weight
        self.fire_threshold = fire_threshold

    def score(self, slot: TimeWindow, context: Dict[str, Any]) -> Dict[str, Any]:
        """
        Score a single candidate slot.

        Args:
            slot: Candidate window
            context: Request-wide scoring context with fields:
                - session_type: Requested type code
                - priority: Requested priority (1-5)
                - look_ahead_days: Horizon length in days
                - now: Current instant
                - tz: The user's pytz timezone
                - patterns: Output of PatternDetector.detect
                - preference: Output of PatternDetector.time_of_day_preference
                - same_type_sessions: Active sessions of the requested type

        Returns:
            Dict with 'score' (int 0-100), 'reasons' (list of str) and
            'title' (title of the matched pattern or None)
        """
        local_start = slot.start.astimezone(context["tz"])
        label = SESSION_TYPE_LABELS[context["session_type"]]

        total = 0
        reasons = []

        pattern_points, pattern = self._calculate_pattern_score(local_start, context["patterns"])
        if pattern_points >= self.fire_threshold:
            total += pattern_points
            reasons.append(
                f"Matches your usual {WEEKDAY_NAMES[pattern['weekday']]} "
                f"{part_of_day(local_start.hour)} routine"
            )
        else:
            pattern = None

        spacing_points, gap_hours = self._calculate_spacing_score(
            slot, context["same_type_sessions"]
        )
        if spacing_points >= self.fire_threshold:
            total += spacing_points
            if gap_hours is None or gap_hours >= IDEAL_SPACING_HOURS:
                reasons.append(f"No other {label} sessions nearby")
            else:
                reasons.append(f"Leaves a break between {label} sessions")

        urgency_points, lead_days = self._calculate_urgency_score(
            slot, context["priority"], context["look_ahead_days"], context["now"]
        )
        if urgency_points >= self.fire_threshold:
            total += urgency_points
            if context["priority"] >= 4:
                reasons.append("Early slot for a high-priority session")
            elif lead_days <= SOON_DAYS_THRESHOLD:
                reasons.append("Available soon")
            else:
                reasons.append("Early in your planning window")

        preference_points = self._calculate_time_of_day_score(local_start, context["preference"])
        if preference_points >= self.fire_threshold:
            total += preference_points
            reasons.append(
                f"In your preferred {context['preference']['part_of_day']} hours for {label}"
            )

        return {
            "score": clamp_points(total, 100),
            "reasons": reasons,
            "title": pattern["title"] if pattern else None,
        }

    def _calculate_pattern_score(self, local_start: datetime, patterns: List[Dict[str, Any]]):
        """Best match among same-weekday patterns within the match window."""
        weekday = WEEKDAY_CODES[local_start.weekday()]
        minutes = minute_of_day(local_start)

        best_points, best_pattern = 0, None
        for pattern in patterns:
            if pattern["weekday"] != weekday:
                continue
            distance = abs(minutes - pattern["minute_of_day"])
            if distance > PATTERN_MATCH_WINDOW_MINUTES:
                continue

            strength = min(1.0, pattern["weighted_frequency"] / PATTERN_SATURATION)
            proximity = 1 - distance / (2 * PATTERN_MATCH_WINDOW_MINUTES)
            points = clamp_points(self.pattern_weight * strength * proximity, self.pattern_weight)
            if points > best_points:
                best_points, best_pattern = points, pattern

        return best_points, best_pattern

    def _calculate_spacing_score(self, slot: TimeWindow, sessions: Iterable[Dict[str, Any]]):
        """Points from the gap (hours) to the nearest same-type session."""
        gap_hours: Optional[float] = None
        for session in sessions:
            gap = max(
                (session["start_time"] - slot.end).total_seconds(),
                (slot.start - session["end_time"]).total_seconds(),
                0,
            ) / 3600
            if gap_hours is None or gap < gap_hours:
                gap_hours = gap

        if gap_hours is None or gap_hours >= IDEAL_SPACING_HOURS:
            return clamp_points(self.spacing_weight, self.spacing_weight), gap_hours
        if gap_hours < MIN_SESSION_SPACING_HOURS:
            return 0, gap_hours

        ratio = (gap_hours - MIN_SESSION_SPACING_HOURS) / (
            IDEAL_SPACING_HOURS - MIN_SESSION_SPACING_HOURS
        )
        return clamp_points(self.spacing_weight * ratio, self.spacing_weight), gap_hours

    def _calculate_urgency_score(
        self, slot: TimeWindow, priority: int, look_ahead_days: int, now: datetime
    ):
        """Points for placing higher priorities earlier in the horizon."""
        lead_days = max(0.0, (slot.start - now).total_seconds() / 86400)
        earliness = max(0.0, 1 - lead_days / look_ahead_days)
        points = self.urgency_weight * (priority / MAX_PRIORITY) * earliness
        return clamp_points(points, self.urgency_weight), lead_days

    def _calculate_time_of_day_score(
        self, local_start: datetime, preference: Optional[Dict[str, Any]]
    ) -> int:
        # Neutral without an inferred preference
        if not preference or part_of_day(local_start.hour) != preference["part_of_day"]:
            return 0
        return clamp_points(self.time_of_day_weight * preference["share"], self.time_of_day_weight)
