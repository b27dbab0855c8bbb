"""
Suggestion & conflict-resolution engine.

The engine is a pure function of (availability, sessions, request, clock,
timezone): it reads plain-data snapshots handed to it by the caller, holds no
state between calls and performs no I/O, so concurrent invocations need no
coordination.

Pipeline:
1. AvailabilityResolver expands weekly windows over the horizon
2. ConflictDetector removes time occupied by existing sessions
3. SlotGenerator tiles the free time into duration-sized candidates
4. SlotScorer ranks each candidate with reasons
5. SuggestionPaginator orders, identifies and slices the result
"""

import logging
from typing import Any, Dict, Iterable, Optional

from algorithms.availability import AvailabilityResolver, ConflictDetector, SlotGenerator
from algorithms.ranking import PatternDetector, SlotScorer, SuggestionPaginator, suggestion_id
from core.exceptions import InvalidInputException
from core.utils.clock import Clock, SystemClock
from utils.constants import (
    DEFAULT_LOOK_AHEAD_DAYS,
    DEFAULT_PRIORITY,
    DEFAULT_SUGGESTION_LIMIT,
    MAX_DURATION_MINUTES,
    MAX_LOOK_AHEAD_DAYS,
    MAX_PRIORITY,
    MAX_SUGGESTION_LIMIT,
    MIN_LOOK_AHEAD_DAYS,
    MIN_PRIORITY,
    SESSION_TYPE_LABELS,
    SESSION_TYPES,
)

logger = logging.getLogger(__name__)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class SuggestionRequest:
    """Requested activity profile and page for a suggestion run."""

    def __init__(
        self,
        session_type: str,
        duration_minutes: int,
        priority: int = DEFAULT_PRIORITY,
        look_ahead_days: int = DEFAULT_LOOK_AHEAD_DAYS,
        limit: int = DEFAULT_SUGGESTION_LIMIT,
        offset: int = 0,
    ):
        self.session_type = session_type
        self.duration_minutes = duration_minutes
        self.priority = priority
        self.look_ahead_days = look_ahead_days
        self.limit = limit
        self.offset = offset

    def validate(self):
        """
        Check every field before any computation starts.

        Raises:
            InvalidInputException: With a field -> message map of all problems
        """
        errors = {}

        if self.session_type not in SESSION_TYPES:
            errors["type"] = f"Unknown session type: {self.session_type}"

        if not _is_int(self.duration_minutes) or self.duration_minutes <= 0:
            errors["duration_minutes"] = "Duration must be a positive number of minutes"
        elif self.duration_minutes > MAX_DURATION_MINUTES:
            errors["duration_minutes"] = f"Duration cannot exceed {MAX_DURATION_MINUTES} minutes"

        if not _is_int(self.priority) or not MIN_PRIORITY <= self.priority <= MAX_PRIORITY:
            errors["priority"] = f"Priority must be between {MIN_PRIORITY} and {MAX_PRIORITY}"

        if (
            not _is_int(self.look_ahead_days)
            or not MIN_LOOK_AHEAD_DAYS <= self.look_ahead_days <= MAX_LOOK_AHEAD_DAYS
        ):
            errors["look_ahead_days"] = (
                f"Look-ahead must be between {MIN_LOOK_AHEAD_DAYS} and {MAX_LOOK_AHEAD_DAYS} days"
            )

        if not _is_int(self.limit) or not 0 < self.limit <= MAX_SUGGESTION_LIMIT:
            errors["limit"] = f"Limit must be between 1 and {MAX_SUGGESTION_LIMIT}"

        if not _is_int(self.offset) or self.offset < 0:
            errors["offset"] = "Offset must be zero or positive"

        if errors:
            raise InvalidInputException(message="Invalid suggestion request", errors=errors)


class SuggestionEngine:
    """Computes ranked, paginated suggestions for one user."""

    def __init__(
        self,
        clock: Optional[Clock] = None,
        scorer: Optional[SlotScorer] = None,
        pattern_detector: Optional[PatternDetector] = None,
        step_minutes: Optional[int] = None,
    ):
        self.clock = clock or SystemClock()
        self.scorer = scorer or SlotScorer()
        self.pattern_detector = pattern_detector or PatternDetector()
        self.conflict_detector = ConflictDetector()
        self.slot_generator = SlotGenerator(step_minutes)
        self.paginator = SuggestionPaginator()

    def suggest(
        self,
        request: SuggestionRequest,
        availability_windows: Iterable[Dict[str, Any]],
        sessions: Iterable[Dict[str, Any]],
        timezone_name: str = "UTC",
    ) -> Dict[str, Any]:
        """
        Compute one page of suggestions.

        Args:
            request: Validated-on-entry suggestion request
            availability_windows: Weekly windows with 'day_of_week',
                'start_time' and 'end_time'
            sessions: The user's sessions as dictionaries (soft-deleted rows
                are ignored)
            timezone_name: The user's IANA timezone

        Returns:
            Dict with 'results', 'count', 'has_more', 'limit' and 'offset'.
            An empty page (no availability or all of it occupied) is not an error.

        Raises:
            InvalidInputException: If the request or timezone is invalid
        """
        request.validate()

        try:
            resolver = AvailabilityResolver(timezone_name)
        except ValueError as e:
            raise InvalidInputException(message=str(e), errors={"timezone": str(e)}) from e

        now = self.clock.now()
        sessions = self.conflict_detector.active_sessions(sessions)

        today, horizon_start, horizon_end = resolver.horizon(now, request.look_ahead_days)
        intervals = resolver.resolve(availability_windows, today, request.look_ahead_days)
        free = self.conflict_detector.prune_availability(intervals, sessions)
        slots = self.slot_generator.generate(free, request.duration_minutes, not_before=now)

        logger.info(
            f"Suggestion run: type={request.session_type} duration={request.duration_minutes} "
            f"horizon={horizon_start.isoformat()}..{horizon_end.isoformat()} "
            f"intervals={len(intervals)} free={len(free)} slots={len(slots)}"
        )

        context = {
            "session_type": request.session_type,
            "priority": request.priority,
            "look_ahead_days": request.look_ahead_days,
            "now": now,
            "tz": resolver.tz,
            "patterns": self.pattern_detector.detect(
                sessions, request.session_type, resolver.tz, now
            ),
            "preference": self.pattern_detector.time_of_day_preference(
                sessions, request.session_type, resolver.tz, now
            ),
            "same_type_sessions": [s for s in sessions if s["type"] == request.session_type],
        }

        label = SESSION_TYPE_LABELS[request.session_type]
        candidates = []
        for slot in slots:
            scored = self.scorer.score(slot, context)
            candidates.append(
                {
                    "id": suggestion_id(request.session_type, slot.start, slot.end),
                    "title": scored["title"] or label,
                    "type": request.session_type,
                    "start_time": slot.start,
                    "end_time": slot.end,
                    "priority": request.priority,
                    "description": None,
                    "score": scored["score"],
                    "reasons": scored["reasons"],
                }
            )

        page = self.paginator.paginate(candidates, request.offset, request.limit)
        page["limit"] = request.limit
        page["offset"] = request.offset
        return page
