# apps/sessionapp/tests/test_models.py
from datetime import timedelta

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.test import TestCase
from django.utils import timezone

from apps.profileapp.tests.factories import UserFactory
from apps.sessionapp.models import Session

from .factories import SessionFactory


class SessionModelTest(TestCase):
    """Test cases for the Session model"""

    def setUp(self):
        self.user = UserFactory()
        self.start = timezone.now().replace(microsecond=0) - timedelta(hours=2)

    def test_duration_and_str(self):
        session = SessionFactory(
            user=self.user, title="Spanish", type="LANGUAGE", start_time=self.start
        )

        self.assertEqual(session.duration_minutes, 60)
        self.assertIn("Spanish (LANGUAGE)", str(session))

    def test_clean_rejects_empty_interval(self):
        session = Session(
            user=self.user, title="Bad", type="OTHER", start_time=self.start, end_time=self.start
        )

        with self.assertRaises(ValidationError):
            session.clean()

    def test_end_after_start_constraint(self):
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Session.objects.create(
                    user=self.user,
                    title="Bad",
                    type="OTHER",
                    start_time=self.start,
                    end_time=self.start - timedelta(minutes=5),
                )

    def test_priority_constraint(self):
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                SessionFactory(user=self.user, priority=6)

    def test_completed_requires_timestamp(self):
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                SessionFactory(user=self.user, completed=True, completed_at=None)

    def test_completed_at_not_before_start(self):
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                SessionFactory(
                    user=self.user,
                    start_time=self.start,
                    completed=True,
                    completed_at=self.start - timedelta(minutes=1),
                )

    def test_mark_completed_and_incomplete(self):
        session = SessionFactory(user=self.user, start_time=self.start)
        now = timezone.now()

        session.mark_completed(when=now)
        session.refresh_from_db()
        self.assertTrue(session.completed)
        self.assertEqual(session.completed_at, now)

        session.mark_incomplete()
        session.refresh_from_db()
        self.assertFalse(session.completed)
        self.assertIsNone(session.completed_at)

    def test_soft_delete_hides_from_active(self):
        kept = SessionFactory(user=self.user)
        removed = SessionFactory(user=self.user)

        removed.soft_delete()

        self.assertTrue(removed.is_deleted)
        self.assertEqual(list(Session.objects.active()), [kept])
        self.assertEqual(Session.objects.count(), 2)

    def test_overlapping_query(self):
        inside = SessionFactory(user=self.user, start_time=self.start)
        SessionFactory(user=self.user, start_time=self.start + timedelta(hours=1))

        overlapping = Session.objects.overlapping(
            self.start + timedelta(minutes=30), self.start + timedelta(hours=1)
        )

        self.assertEqual(list(overlapping), [inside])

    def test_for_engine_rows(self):
        SessionFactory(user=self.user)

        row = Session.objects.for_engine().get()

        self.assertEqual(
            set(row),
            {"id", "title", "type", "start_time", "end_time", "completed", "completed_at", "deleted_at"},
        )
