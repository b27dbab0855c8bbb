# apps/suggestionapp/tests/test_views.py
import datetime
from unittest.mock import patch

from django.db import DatabaseError
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from apps.availabilityapp.tests.factories import AvailabilityWindowFactory
from apps.profileapp.tests.factories import UserFactory
from utils.constants import WEEKDAY_CODES


class SuggestionViewTest(TestCase):
    """Test cases for the SuggestionView"""

    def setUp(self):
        self.user = UserFactory()
        self.client = APIClient()
        self.client.force_authenticate(user=self.user)
        self.url = reverse("suggestions")

        # Late-evening availability every day keeps slots in the future
        for code in WEEKDAY_CODES:
            AvailabilityWindowFactory(
                user=self.user,
                day_of_week=code,
                start_time=datetime.time(22, 0),
                end_time=datetime.time(23, 0),
            )

    def test_post_returns_page(self):
        response = self.client.post(
            self.url,
            {"type": "READING", "duration_minutes": 30, "look_ahead_days": 7, "limit": 5},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["limit"], 5)
        self.assertEqual(response.data["offset"], 0)
        self.assertEqual(len(response.data["results"]), 5)
        self.assertTrue(response.data["has_more"])
        self.assertGreaterEqual(response.data["count"], 12)

        suggestion = response.data["results"][0]
        self.assertEqual(
            set(suggestion),
            {
                "id",
                "title",
                "type",
                "start_time",
                "end_time",
                "priority",
                "description",
                "score",
                "reasons",
            },
        )
        self.assertEqual(suggestion["type"], "READING")
        self.assertEqual(suggestion["title"], "Reading")
        self.assertEqual(suggestion["priority"], 3)

    def test_get_with_query_params(self):
        response = self.client.get(
            self.url, {"type": "MEDITATION", "duration_minutes": 60, "offset": 2, "limit": 2}
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["offset"], 2)
        self.assertEqual(len(response.data["results"]), 2)

    def test_invalid_request(self):
        response = self.client.post(
            self.url,
            {"type": "NAPPING", "duration_minutes": 0, "look_ahead_days": 45},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "INVALID_INPUT")
        self.assertEqual(
            set(response.data["details"]), {"type", "duration_minutes", "look_ahead_days"}
        )

    def test_no_availability_is_empty(self):
        user = UserFactory()
        self.client.force_authenticate(user=user)

        response = self.client.post(
            self.url, {"type": "STUDY", "duration_minutes": 30}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 0)
        self.assertEqual(response.data["results"], [])
        self.assertFalse(response.data["has_more"])

    def test_upstream_unavailable(self):
        with patch(
            "apps.suggestionapp.services.suggestion_service.ProfileService.get_timezone",
            side_effect=DatabaseError("connection lost"),
        ):
            response = self.client.post(
                self.url, {"type": "STUDY", "duration_minutes": 30}, format="json"
            )

        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(response.data["error"], "UPSTREAM_UNAVAILABLE")

    def test_authentication_required(self):
        response = APIClient().post(self.url, {"type": "STUDY", "duration_minutes": 30})

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
