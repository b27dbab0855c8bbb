"""
Conflict detection between candidate windows and existing sessions.

Sessions are plain dictionaries with at least 'start_time', 'end_time' and
optionally 'deleted_at'. Soft-deleted sessions never conflict.
"""

import logging
from typing import Any, Dict, Iterable, List

from .time_window import TimeWindow

logger = logging.getLogger(__name__)


class ConflictDetector:
    """Detects temporal overlap with a user's existing sessions."""

    @staticmethod
    def active_sessions(sessions: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Drop soft-deleted sessions."""
        return [session for session in sessions if session.get("deleted_at") is None]

    def find_conflicts(
        self, candidate: TimeWindow, sessions: Iterable[Dict[str, Any]]
    ) -> List[Dict[str, Any]]:
        """
        Find every active session overlapping the candidate window.

        Args:
            candidate: Proposed session window
            sessions: Existing sessions of the user

        Returns:
            Overlapping sessions ordered by start time
        """
        conflicts = [
            session
            for session in self.active_sessions(sessions)
            if candidate.overlaps(TimeWindow.from_session(session))
        ]
        conflicts.sort(key=lambda session: (session["start_time"], session["end_time"]))

        if conflicts:
            logger.debug(f"Found {len(conflicts)} conflicts for {candidate}")

        return conflicts

    def prune_availability(
        self, intervals: Iterable[TimeWindow], sessions: Iterable[Dict[str, Any]]
    ) -> List[TimeWindow]:
        """
        Subtract occupied session time from availability intervals.

        Args:
            intervals: Concrete availability windows
            sessions: Existing sessions of the user

        Returns:
            Free sub-windows sorted by start
        """
        occupied = [TimeWindow.from_session(session) for session in self.active_sessions(sessions)]

        free = []
        for interval in intervals:
            free.extend(interval.subtract(occupied))

        free.sort(key=lambda window: (window.start, window.end))
        return free
