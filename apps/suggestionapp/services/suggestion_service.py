# apps/suggestionapp/services/suggestion_service.py
import logging
from datetime import timedelta
from typing import Optional

from django.conf import settings
from django.db import DatabaseError

from algorithms.ranking import PatternDetector, SlotScorer
from algorithms.suggestion_engine import SuggestionEngine, SuggestionRequest
from apps.availabilityapp.models import AvailabilityWindow
from apps.profileapp.services.profile_service import ProfileService
from apps.sessionapp.models import Session
from core.exceptions import UpstreamUnavailableException
from core.utils.clock import Clock, SystemClock
from utils.constants import DEFAULT_SCORING_WEIGHTS, PATTERN_HISTORY_DAYS

logger = logging.getLogger(__name__)


class SuggestionService:
    """
    Loads a user's scheduling data and runs the suggestion engine on it.

    This is the only place suggestion generation touches the database; the
    engine itself receives plain dictionaries.
    """

    @staticmethod
    def engine_settings():
        """Engine tunables from settings, falling back to module defaults"""
        return getattr(settings, "SUGGESTION_ENGINE", {})

    @staticmethod
    def build_engine(clock: Optional[Clock] = None) -> SuggestionEngine:
        """Build an engine configured from the SUGGESTION_ENGINE setting"""
        config = SuggestionService.engine_settings()
        weights = {**DEFAULT_SCORING_WEIGHTS, **config.get("WEIGHTS", {})}

        scorer = SlotScorer(
            pattern_weight=weights["pattern"],
            spacing_weight=weights["spacing"],
            urgency_weight=weights["urgency"],
            time_of_day_weight=weights["time_of_day"],
        )
        return SuggestionEngine(
            clock=clock,
            scorer=scorer,
            pattern_detector=PatternDetector(),
            step_minutes=config.get("SLOT_STEP_MINUTES"),
        )

    @staticmethod
    def load_snapshot(user, now, look_ahead_days):
        """
        Read the user's timezone, weekly windows and relevant sessions.

        Sessions are limited to those that can block the horizon or inform
        pattern detection.

        Returns:
            Tuple of (timezone_name, windows, sessions) as plain data

        Raises:
            UpstreamUnavailableException: If the database cannot be read
        """
        history_days = SuggestionService.engine_settings().get(
            "PATTERN_HISTORY_DAYS", PATTERN_HISTORY_DAYS
        )
        # Local midnight can precede "now" by up to a day
        horizon_end = now + timedelta(days=look_ahead_days + 1)
        history_start = now - timedelta(days=history_days)

        try:
            timezone_name = ProfileService.get_timezone(user)
            windows = list(
                AvailabilityWindow.objects.filter(user=user).values(
                    "day_of_week", "start_time", "end_time"
                )
            )
            sessions = list(
                Session.objects.active()
                .filter(user=user, start_time__lt=horizon_end, end_time__gt=history_start)
                .for_engine()
            )
        except DatabaseError as e:
            logger.error(f"Could not load scheduling data for user {user.pk}: {str(e)}")
            raise UpstreamUnavailableException(
                "Scheduling data is temporarily unavailable"
            ) from e

        return timezone_name, windows, sessions

    @staticmethod
    def get_suggestions(user, request: SuggestionRequest, clock: Optional[Clock] = None):
        """
        Compute a page of suggested slots for a user.

        Args:
            user: The user asking for suggestions
            request: Requested type, duration, priority, horizon and page
            clock: Clock providing "now"

        Returns:
            Engine page with 'results', 'count', 'has_more', 'limit', 'offset'

        Raises:
            InvalidInputException: If the request is invalid
            UpstreamUnavailableException: If the scheduling data cannot be read
        """
        clock = clock or SystemClock()
        request.validate()

        timezone_name, windows, sessions = SuggestionService.load_snapshot(
            user, clock.now(), request.look_ahead_days
        )

        engine = SuggestionService.build_engine(clock)
        page = engine.suggest(request, windows, sessions, timezone_name=timezone_name)

        logger.debug(
            f"Suggestions for user {user.pk}: {page['count']} candidates, "
            f"returned {len(page['results'])}"
        )
        return page
