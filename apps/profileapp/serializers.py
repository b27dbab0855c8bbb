# apps/profileapp/serializers.py
from rest_framework import serializers

from apps.profileapp.models import Profile


class ProfileSerializer(serializers.ModelSerializer):
    """Serializer for the authenticated user's profile"""

    username = serializers.CharField(source="user.username", read_only=True)

    class Meta:
        model = Profile
        fields = ["username", "timezone", "created_at", "updated_at"]
        read_only_fields = ["username", "created_at", "updated_at"]
