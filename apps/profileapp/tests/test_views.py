# apps/profileapp/tests/test_views.py
from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from apps.profileapp.models import Profile
from apps.profileapp.services.profile_service import ProfileService

from .factories import UserFactory


class ProfileTest(TestCase):
    """Test cases for profiles and the timezone source"""

    def setUp(self):
        self.user = UserFactory()
        self.client = APIClient()
        self.client.force_authenticate(user=self.user)

    def test_profile_created_for_new_user(self):
        self.assertTrue(Profile.objects.filter(user=self.user).exists())
        self.assertEqual(ProfileService.get_timezone(self.user), "UTC")

    def test_missing_profile_means_utc(self):
        Profile.objects.filter(user=self.user).delete()

        self.assertEqual(ProfileService.get_timezone(self.user), "UTC")

    def test_factory_sets_timezone(self):
        user = UserFactory(timezone="Asia/Tokyo")

        self.assertEqual(ProfileService.get_timezone(user), "Asia/Tokyo")

    def test_get_me(self):
        response = self.client.get(reverse("profile-me"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["username"], self.user.username)
        self.assertEqual(response.data["timezone"], "UTC")

    def test_update_timezone(self):
        response = self.client.patch(
            reverse("profile-me"), {"timezone": "Europe/Berlin"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(ProfileService.get_timezone(self.user), "Europe/Berlin")

    def test_invalid_timezone_rejected(self):
        response = self.client.patch(
            reverse("profile-me"), {"timezone": "Mars/Olympus_Mons"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "INVALID_INPUT")
        self.assertIn("timezone", response.data["details"])

    def test_user_created_without_factory_gets_profile(self):
        user = get_user_model().objects.create_user(username="plain", password="testpass123")

        self.assertEqual(user.profile.timezone, "UTC")
