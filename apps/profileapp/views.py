# apps/profileapp/views.py
from rest_framework import generics, permissions

from apps.profileapp.models import Profile
from apps.profileapp.serializers import ProfileSerializer


class MyProfileView(generics.RetrieveUpdateAPIView):
    """
    API endpoint for the authenticated user's profile.

    The timezone stored here drives weekday expansion of availability and
    all "today"/"this week" calculations.
    """

    serializer_class = ProfileSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_object(self):
        profile, _ = Profile.objects.get_or_create(user=self.request.user)
        return profile
