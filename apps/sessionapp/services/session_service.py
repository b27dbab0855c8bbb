"""
Session Service Module

This module manages the session lifecycle: creation, updates, completion and
soft deletion. Writes that can introduce overlap run the conflict check and
the write against one consistent snapshot: a per-user distributed lock, a
database transaction and a row lock on the user's profile.
"""

import logging
from typing import Any, Dict, Optional

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction

from apps.profileapp.services.profile_service import ProfileService
from apps.sessionapp.models import Session
from core.exceptions import (
    InvalidInputException,
    ResourceNotFoundException,
    SchedulingConflictException,
)
from core.utils.clock import Clock, SystemClock
from utils.distributed_locks import with_distributed_lock

from .conflict_service import ConflictService

logger = logging.getLogger(__name__)

SCHEDULE_LOCK_KEY = "schedule:user:{user.pk}"

UPDATABLE_FIELDS = (
    "title",
    "type",
    "start_time",
    "end_time",
    "priority",
    "description",
    "completed",
)


class SessionService:
    """
    Service for managing sessions with conflict gating and concurrency control.

    This service handles:
    - Session creation and update, rejecting overlaps unless explicitly allowed
    - Completion toggling with a consistent completion timestamp
    - Soft deletion
    """

    @staticmethod
    def get_session(user, session_id, for_update=False) -> Session:
        """
        Get an active session owned by the user.

        Raises:
            ResourceNotFoundException: If the session does not exist, belongs
                to someone else or was deleted
        """
        queryset = Session.objects.active()
        if for_update:
            queryset = queryset.select_for_update()
        try:
            return queryset.get(user=user, id=session_id)
        except (Session.DoesNotExist, DjangoValidationError, ValueError):
            raise ResourceNotFoundException("Session not found or access denied")

    @staticmethod
    def _ensure_can_complete(start_time, now):
        if start_time > now:
            raise InvalidInputException(
                message="A session cannot be completed before it starts",
                errors={"completed": "Session has not started yet"},
            )

    @staticmethod
    def _gate_conflicts(user, start_time, end_time, allow_conflicts, exclude_session_id=None):
        conflicts = ConflictService.find_conflicting_sessions(
            user, start_time, end_time, exclude_session_id=exclude_session_id
        )
        if not conflicts:
            return

        if not allow_conflicts:
            logger.warning(
                f"Rejected session for user {user.pk} at {start_time.isoformat()}: "
                f"{len(conflicts)} conflicts"
            )
            raise SchedulingConflictException(conflicts=ConflictService.summarize(conflicts))

        logger.info(
            f"Saving session for user {user.pk} despite {len(conflicts)} conflicts"
        )

    @staticmethod
    @with_distributed_lock(SCHEDULE_LOCK_KEY)
    @transaction.atomic
    def create_session(
        user,
        data: Dict[str, Any],
        allow_conflicts: bool = False,
        clock: Optional[Clock] = None,
    ) -> Session:
        """
        Create a new session.

        Args:
            user: Owner of the session
            data: Validated fields (title, type, start_time, end_time and
                optionally priority, description, completed, from_suggestion_id)
            allow_conflicts: Save even when the interval overlaps other sessions
            clock: Clock used for completion timestamps

        Returns:
            The created Session

        Raises:
            InvalidInputException: If the interval is empty or a future
                session is created as completed
            SchedulingConflictException: If the interval overlaps and
                allow_conflicts is False
        """
        now = (clock or SystemClock()).now()
        data = dict(data)
        completed = data.pop("completed", False)

        ConflictService.validate_interval(data.get("start_time"), data.get("end_time"))
        if completed:
            SessionService._ensure_can_complete(data["start_time"], now)

        ProfileService.lock_profile(user)
        SessionService._gate_conflicts(
            user, data["start_time"], data["end_time"], allow_conflicts
        )

        session = Session.objects.create(
            user=user,
            completed=completed,
            completed_at=now if completed else None,
            **data,
        )
        return session

    @staticmethod
    @with_distributed_lock(SCHEDULE_LOCK_KEY)
    @transaction.atomic
    def update_session(
        user,
        session_id,
        data: Dict[str, Any],
        allow_conflicts: bool = False,
        clock: Optional[Clock] = None,
    ) -> Session:
        """
        Update a session.

        Args:
            user: Owner of the session
            session_id: UUID of the session
            data: Fields to change
            allow_conflicts: Save even when the new interval overlaps
            clock: Clock used for completion timestamps

        Returns:
            The updated Session

        Raises:
            InvalidInputException: If nothing is updated or the result is invalid
            ResourceNotFoundException: If the session is not found
            SchedulingConflictException: If the new interval overlaps and
                allow_conflicts is False
        """
        updates = {field: value for field, value in data.items() if field in UPDATABLE_FIELDS}
        if not updates:
            raise InvalidInputException("No fields provided to update")

        now = (clock or SystemClock()).now()

        ProfileService.lock_profile(user)
        session = SessionService.get_session(user, session_id, for_update=True)

        start_time = updates.get("start_time", session.start_time)
        end_time = updates.get("end_time", session.end_time)
        ConflictService.validate_interval(start_time, end_time)

        if start_time != session.start_time or end_time != session.end_time:
            SessionService._gate_conflicts(
                user, start_time, end_time, allow_conflicts, exclude_session_id=session.id
            )

        completed = updates.pop("completed", session.completed)
        if completed and not session.completed:
            SessionService._ensure_can_complete(start_time, now)
            session.completed_at = now
        elif not completed:
            session.completed_at = None
        elif session.completed_at < start_time:
            raise InvalidInputException(
                message="A completed session cannot start after it was completed",
                errors={"start_time": "Later than the completion time"},
            )
        session.completed = completed

        for field, value in updates.items():
            setattr(session, field, value)
        session.save()

        return session

    @staticmethod
    @transaction.atomic
    def toggle_complete(user, session_id, clock: Optional[Clock] = None) -> Session:
        """
        Flip the completion status of a session.

        Completing sets ``completed_at`` to now; un-completing clears it.

        Raises:
            ResourceNotFoundException: If the session is not found
            InvalidInputException: If the session has not started yet
        """
        now = (clock or SystemClock()).now()
        session = SessionService.get_session(user, session_id, for_update=True)

        if session.completed:
            session.mark_incomplete()
        else:
            SessionService._ensure_can_complete(session.start_time, now)
            session.mark_completed(when=now)

        return session

    @staticmethod
    @transaction.atomic
    def delete_session(user, session_id, clock: Optional[Clock] = None) -> Session:
        """
        Soft-delete a session.

        Raises:
            ResourceNotFoundException: If the session is not found
        """
        now = (clock or SystemClock()).now()
        session = SessionService.get_session(user, session_id, for_update=True)
        session.soft_delete(when=now)

        logger.info(f"Session deleted: ID={session.id}, User={user.pk}")
        return session
