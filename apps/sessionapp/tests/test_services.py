# apps/sessionapp/tests/test_services.py
from datetime import date, datetime, timedelta

import pytz
from django.test import TestCase, override_settings
from django.utils import timezone

from apps.profileapp.tests.factories import UserFactory
from apps.sessionapp.models import Session
from apps.sessionapp.services.conflict_service import ConflictService
from apps.sessionapp.services.session_service import SessionService
from apps.sessionapp.services.stats_service import SessionStatsService
from core.exceptions import (
    ErrorKind,
    InvalidInputException,
    LockTimeoutException,
    ResourceNotFoundException,
    SchedulingConflictException,
)
from core.utils.clock import FixedClock
from utils.distributed_locks import schedule_lock

from .factories import SessionFactory


class ConflictServiceTest(TestCase):
    """Test cases for the ConflictService"""

    def setUp(self):
        self.user = UserFactory()
        self.start = timezone.now().replace(microsecond=0) + timedelta(days=1)
        self.session = SessionFactory(user=self.user, start_time=self.start)

    def test_overlap_detected(self):
        result = ConflictService.check_conflicts(
            self.user, self.start + timedelta(minutes=30), self.start + timedelta(minutes=90)
        )

        self.assertTrue(result["has_conflict"])
        self.assertEqual([c["id"] for c in result["conflicts"]], [str(self.session.id)])

    def test_touching_interval_is_free(self):
        result = ConflictService.check_conflicts(
            self.user, self.start + timedelta(hours=1), self.start + timedelta(hours=2)
        )

        self.assertFalse(result["has_conflict"])
        self.assertEqual(result["conflicts"], [])

    def test_excluded_session_and_other_users_ignored(self):
        SessionFactory(start_time=self.start)

        result = ConflictService.check_conflicts(
            self.user,
            self.start,
            self.start + timedelta(hours=1),
            exclude_session_id=self.session.id,
        )

        self.assertFalse(result["has_conflict"])

    def test_deleted_sessions_ignored(self):
        self.session.soft_delete()

        conflicts = ConflictService.find_conflicting_sessions(
            self.user, self.start, self.start + timedelta(hours=1)
        )

        self.assertEqual(conflicts, [])

    def test_invalid_interval(self):
        with self.assertRaises(InvalidInputException):
            ConflictService.check_conflicts(self.user, self.start, self.start)


class SessionServiceTest(TestCase):
    """Test cases for the SessionService"""

    def setUp(self):
        self.user = UserFactory()
        self.now = timezone.now().replace(microsecond=0)
        self.clock = FixedClock(self.now)
        self.start = self.now + timedelta(days=1)

    def data(self, start=None, minutes=60, **extra):
        start = start or self.start
        data = {
            "title": "Deep focus",
            "type": "DEEP_WORK",
            "start_time": start,
            "end_time": start + timedelta(minutes=minutes),
        }
        data.update(extra)
        return data

    def test_create_session(self):
        session = SessionService.create_session(self.user, self.data(priority=4))

        self.assertEqual(session.user, self.user)
        self.assertEqual(session.priority, 4)
        self.assertFalse(session.completed)
        self.assertIsNone(session.completed_at)

    def test_create_conflict_then_allowed(self):
        existing = SessionService.create_session(self.user, self.data())
        overlapping = self.data(start=self.start + timedelta(minutes=30), title="Overlap")

        with self.assertRaises(SchedulingConflictException) as ctx:
            SessionService.create_session(self.user, overlapping)

        self.assertEqual(ctx.exception.kind, ErrorKind.CONFLICT)
        self.assertEqual(ctx.exception.message, "This time slot conflicts with 1 existing session(s)")
        self.assertEqual([c["id"] for c in ctx.exception.conflicts], [str(existing.id)])
        self.assertEqual(Session.objects.filter(user=self.user).count(), 1)

        session = SessionService.create_session(self.user, overlapping, allow_conflicts=True)

        self.assertEqual(session.title, "Overlap")
        self.assertEqual(Session.objects.filter(user=self.user).count(), 2)

    def test_create_completed_past_session(self):
        start = self.now - timedelta(hours=2)

        session = SessionService.create_session(
            self.user, self.data(start=start, completed=True), clock=self.clock
        )

        self.assertTrue(session.completed)
        self.assertEqual(session.completed_at, self.now)

    def test_create_completed_future_session_rejected(self):
        with self.assertRaises(InvalidInputException):
            SessionService.create_session(self.user, self.data(completed=True), clock=self.clock)

    def test_update_requires_fields(self):
        session = SessionFactory(user=self.user)

        with self.assertRaises(InvalidInputException) as ctx:
            SessionService.update_session(self.user, session.id, {})

        self.assertEqual(ctx.exception.message, "No fields provided to update")

    def test_update_time_rechecks_conflicts_excluding_itself(self):
        session = SessionService.create_session(self.user, self.data())
        other = SessionService.create_session(
            self.user, self.data(start=self.start + timedelta(hours=2))
        )

        # Moving within its own slot is not a conflict
        moved = SessionService.update_session(
            self.user, session.id, {"end_time": self.start + timedelta(minutes=90)}
        )
        self.assertEqual(moved.end_time, self.start + timedelta(minutes=90))

        with self.assertRaises(SchedulingConflictException) as ctx:
            SessionService.update_session(
                self.user, session.id, {"end_time": self.start + timedelta(hours=2, minutes=30)}
            )
        self.assertEqual([c["id"] for c in ctx.exception.conflicts], [str(other.id)])

        updated = SessionService.update_session(
            self.user,
            session.id,
            {"end_time": self.start + timedelta(hours=2, minutes=30)},
            allow_conflicts=True,
        )
        self.assertEqual(updated.end_time, self.start + timedelta(hours=2, minutes=30))

    def test_update_completion_sets_and_clears_timestamp(self):
        session = SessionFactory(
            user=self.user,
            start_time=self.now - timedelta(hours=3),
            end_time=self.now - timedelta(hours=2),
        )

        completed = SessionService.update_session(
            self.user, session.id, {"completed": True}, clock=self.clock
        )
        self.assertTrue(completed.completed)
        self.assertEqual(completed.completed_at, self.now)

        reopened = SessionService.update_session(self.user, session.id, {"completed": False})
        self.assertFalse(reopened.completed)
        self.assertIsNone(reopened.completed_at)

    def test_toggle_complete(self):
        session = SessionFactory(
            user=self.user,
            start_time=self.now - timedelta(hours=1),
            end_time=self.now,
        )

        toggled = SessionService.toggle_complete(self.user, session.id, clock=self.clock)
        self.assertTrue(toggled.completed)
        self.assertEqual(toggled.completed_at, self.now)

        toggled = SessionService.toggle_complete(self.user, session.id, clock=self.clock)
        self.assertFalse(toggled.completed)
        self.assertIsNone(toggled.completed_at)

    def test_toggle_future_session_rejected(self):
        session = SessionFactory(user=self.user, start_time=self.start)

        with self.assertRaises(InvalidInputException):
            SessionService.toggle_complete(self.user, session.id, clock=self.clock)

    def test_delete_is_soft(self):
        session = SessionFactory(user=self.user)

        SessionService.delete_session(self.user, session.id, clock=self.clock)

        session.refresh_from_db()
        self.assertEqual(session.deleted_at, self.now)
        self.assertFalse(Session.objects.active().filter(id=session.id).exists())

        with self.assertRaises(ResourceNotFoundException):
            SessionService.delete_session(self.user, session.id)

    @override_settings(SCHEDULE_LOCK_TIMEOUT=0)
    def test_create_waits_for_schedule_lock(self):
        with schedule_lock(f"schedule:user:{self.user.pk}"):
            with self.assertRaises(LockTimeoutException) as ctx:
                SessionService.create_session(self.user, self.data())

        self.assertEqual(ctx.exception.kind, ErrorKind.UPSTREAM_UNAVAILABLE)
        self.assertFalse(Session.objects.filter(user=self.user).exists())

        # Released lock lets the write through
        SessionService.create_session(self.user, self.data())
        self.assertEqual(Session.objects.filter(user=self.user).count(), 1)

    @override_settings(SCHEDULE_LOCK_TIMEOUT=0)
    def test_update_waits_for_schedule_lock(self):
        session = SessionFactory(user=self.user, start_time=self.start, title="Gym")

        with schedule_lock(f"schedule:user:{self.user.pk}"):
            with self.assertRaises(LockTimeoutException):
                SessionService.update_session(self.user, session.id, {"title": "Swim"})

        session.refresh_from_db()
        self.assertEqual(session.title, "Gym")

    @override_settings(SCHEDULE_LOCK_TIMEOUT=0)
    def test_other_users_lock_does_not_block(self):
        other = UserFactory()

        with schedule_lock(f"schedule:user:{other.pk}"):
            session = SessionService.create_session(self.user, self.data())

        self.assertEqual(session.user, self.user)

    def test_other_users_session_not_found(self):
        session = SessionFactory()

        with self.assertRaises(ResourceNotFoundException):
            SessionService.get_session(self.user, session.id)

        with self.assertRaises(ResourceNotFoundException):
            SessionService.get_session(self.user, "not-a-uuid")


class SessionStatsServiceTest(TestCase):
    """Test cases for the SessionStatsService"""

    def setUp(self):
        self.user = UserFactory()
        # Wednesday 2024-01-10 12:00 UTC
        self.now = datetime(2024, 1, 10, 12, 0, tzinfo=pytz.UTC)
        self.clock = FixedClock(self.now)

    def at(self, day, hour):
        return datetime(2024, 1, day, hour, 0, tzinfo=pytz.UTC)

    def test_empty_stats(self):
        stats = SessionStatsService.get_stats(self.user, clock=self.clock)

        self.assertEqual(stats["total"], 0)
        self.assertEqual(stats["completion_rate"], 0)
        self.assertIsNone(stats["average_spacing_hours"])
        self.assertEqual(stats["current_streak_days"], 0)
        self.assertEqual(len(stats["by_type"]), 8)
        self.assertEqual(set(stats["by_type"].values()), {0})

    def test_stats(self):
        SessionFactory(user=self.user, start_time=self.at(8, 9), done=True)
        SessionFactory(user=self.user, start_time=self.at(9, 9), done=True, type="READING")
        SessionFactory(user=self.user, start_time=self.at(10, 9), done=True)
        SessionFactory(user=self.user, start_time=self.at(10, 18))
        SessionFactory(user=self.user, start_time=self.at(6, 9), done=True)
        SessionFactory(user=self.user, start_time=self.at(10, 20)).soft_delete()

        stats = SessionStatsService.get_stats(self.user, clock=self.clock)

        self.assertEqual(stats["total"], 5)
        self.assertEqual(stats["completed"], 4)
        self.assertEqual(stats["pending"], 1)
        self.assertEqual(stats["completion_rate"], 80)
        self.assertEqual(stats["by_type"]["WORKOUT"], 4)
        self.assertEqual(stats["by_type"]["READING"], 1)
        # Starts span 4 days and 9 hours across 4 gaps
        self.assertEqual(stats["average_spacing_hours"], 26.2)
        self.assertEqual(stats["current_streak_days"], 3)
        self.assertEqual(stats["longest_streak_days"], 3)
        self.assertEqual(stats["today"], {"total": 2, "completed": 1})
        # Week of Sunday 2024-01-07
        self.assertEqual(stats["week"], {"total": 4, "completed": 3})

    def test_streak_broken_before_yesterday(self):
        self.assertEqual(
            SessionStatsService.calculate_streaks(
                {date(2024, 1, 5), date(2024, 1, 6), date(2024, 1, 7)}, date(2024, 1, 10)
            ),
            (0, 3),
        )
        self.assertEqual(
            SessionStatsService.calculate_streaks({date(2024, 1, 9)}, date(2024, 1, 10)),
            (1, 1),
        )
