# apps/sessionapp/services/conflict_service.py
import logging

from algorithms.availability import ConflictDetector, TimeWindow
from apps.sessionapp.models import Session
from core.exceptions import InvalidInputException

logger = logging.getLogger(__name__)


class ConflictService:
    """Detects overlap between a proposed interval and a user's sessions"""

    @staticmethod
    def validate_interval(start_time, end_time):
        """
        Build a window for a proposed interval.

        Raises:
            InvalidInputException: If end time is not after start time
        """
        if start_time is None or end_time is None:
            raise InvalidInputException(
                message="Start and end time are required",
                errors={"start_time": "required", "end_time": "required"},
            )
        if end_time <= start_time:
            raise InvalidInputException(
                message="End time must be after start time",
                errors={"end_time": "End time must be after start time"},
            )
        return TimeWindow(start_time, end_time)

    @staticmethod
    def find_conflicting_sessions(user, start_time, end_time, exclude_session_id=None):
        """
        Find the user's active sessions overlapping a proposed interval

        Args:
            user: Owner of the sessions
            start_time: Datetime of proposed start
            end_time: Datetime of proposed end
            exclude_session_id: Optional session ID to exclude (for updates)

        Returns:
            List of overlapping Session instances ordered by start time
        """
        candidate = ConflictService.validate_interval(start_time, end_time)

        queryset = Session.objects.active().overlapping(start_time, end_time).filter(user=user)
        if exclude_session_id:
            queryset = queryset.exclude(id=exclude_session_id)

        sessions = {session.id: session for session in queryset}
        rows = [
            {
                "id": session.id,
                "start_time": session.start_time,
                "end_time": session.end_time,
                "deleted_at": session.deleted_at,
            }
            for session in sessions.values()
        ]

        conflicts = ConflictDetector().find_conflicts(candidate, rows)
        return [sessions[row["id"]] for row in conflicts]

    @staticmethod
    def summarize(sessions):
        """JSON-friendly summary of conflicting sessions"""
        return [
            {
                "id": str(session.id),
                "title": session.title,
                "type": session.type,
                "start_time": session.start_time.isoformat(),
                "end_time": session.end_time.isoformat(),
                "completed": session.completed,
            }
            for session in sessions
        ]

    @staticmethod
    def check_conflicts(user, start_time, end_time, exclude_session_id=None):
        """
        Check a proposed interval against the user's sessions

        Returns:
            Dict with 'has_conflict' and 'conflicts' (summaries)
        """
        conflicts = ConflictService.find_conflicting_sessions(
            user, start_time, end_time, exclude_session_id=exclude_session_id
        )
        if conflicts:
            logger.debug(f"{len(conflicts)} conflicts for user {user.pk} at {start_time}..{end_time}")
        return {"has_conflict": bool(conflicts), "conflicts": ConflictService.summarize(conflicts)}
