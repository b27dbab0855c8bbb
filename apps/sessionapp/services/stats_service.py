# apps/sessionapp/services/stats_service.py
import logging
from datetime import timedelta
from typing import Optional

from django.db.models import Count, Q

from apps.profileapp.services.profile_service import ProfileService
from apps.sessionapp.models import Session
from apps.sessionapp.utils.date_utils import local_date, local_day_bounds, local_week_bounds
from core.utils.clock import Clock, SystemClock
from utils.constants import SESSION_TYPES

logger = logging.getLogger(__name__)


class SessionStatsService:
    """Aggregate statistics over a user's active sessions"""

    @staticmethod
    def get_stats(user, clock: Optional[Clock] = None):
        """
        Compute session statistics for a user.

        Args:
            user: The user
            clock: Clock used for "today", "this week" and streaks

        Returns:
            Dictionary of totals, per-type counts, spacing and streaks
        """
        now = (clock or SystemClock()).now()
        timezone_name = ProfileService.get_timezone(user)
        sessions = Session.objects.active().filter(user=user)

        totals = sessions.aggregate(
            total=Count("id"), completed=Count("id", filter=Q(completed=True))
        )
        total = totals["total"]
        completed = totals["completed"]

        by_type = {session_type: 0 for session_type in SESSION_TYPES}
        for row in sessions.values("type").annotate(count=Count("id")):
            by_type[row["type"]] = row["count"]

        starts = list(sessions.order_by("start_time").values_list("start_time", flat=True))
        completed_days = {
            local_date(start, timezone_name)
            for start in sessions.filter(completed=True).values_list("start_time", flat=True)
        }
        current_streak, longest_streak = SessionStatsService.calculate_streaks(
            completed_days, local_date(now, timezone_name)
        )

        day_start, day_end = local_day_bounds(now, timezone_name)
        week_start, week_end = local_week_bounds(now, timezone_name)

        return {
            "total": total,
            "completed": completed,
            "pending": total - completed,
            "completion_rate": round(completed * 100 / total) if total else 0,
            "by_type": by_type,
            "average_spacing_hours": SessionStatsService.average_spacing_hours(starts),
            "current_streak_days": current_streak,
            "longest_streak_days": longest_streak,
            "today": SessionStatsService._window_counts(sessions, day_start, day_end),
            "week": SessionStatsService._window_counts(sessions, week_start, week_end),
        }

    @staticmethod
    def _window_counts(sessions, start, end):
        counts = sessions.filter(start_time__gte=start, start_time__lt=end).aggregate(
            total=Count("id"), completed=Count("id", filter=Q(completed=True))
        )
        return {"total": counts["total"], "completed": counts["completed"]}

    @staticmethod
    def average_spacing_hours(starts):
        """Mean gap between consecutive session starts, None below two sessions"""
        if len(starts) < 2:
            return None

        gaps = [
            (later - earlier).total_seconds() / 3600
            for earlier, later in zip(starts, starts[1:])
        ]
        return round(sum(gaps) / len(gaps), 1)

    @staticmethod
    def calculate_streaks(days, today):
        """
        Compute current and longest runs of consecutive days.

        Args:
            days: Set of local dates with at least one completed session
            today: Local date of "now"

        Returns:
            Tuple of (current_streak, longest_streak)
        """
        if not days:
            return 0, 0

        ordered = sorted(days)
        longest = run = 1
        for previous, day in zip(ordered, ordered[1:]):
            run = run + 1 if day - previous == timedelta(days=1) else 1
            longest = max(longest, run)

        # The current streak must end today or yesterday
        anchor = today if today in days else today - timedelta(days=1)
        current = 0
        while anchor in days:
            current += 1
            anchor -= timedelta(days=1)

        return current, longest
