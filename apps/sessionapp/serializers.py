# apps/sessionapp/serializers.py
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from apps.sessionapp.enums import SessionType
from apps.sessionapp.models import Session


class SessionSerializer(serializers.ModelSerializer):
    """Serializer for sessions"""

    type_display = serializers.CharField(source="get_type_display", read_only=True)
    duration_minutes = serializers.IntegerField(read_only=True)

    class Meta:
        model = Session
        fields = [
            "id",
            "title",
            "type",
            "type_display",
            "start_time",
            "end_time",
            "duration_minutes",
            "priority",
            "completed",
            "completed_at",
            "description",
            "from_suggestion_id",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class SessionWriteSerializer(serializers.ModelSerializer):
    """
    Serializer for creating and updating sessions.

    ``allow_conflicts`` is not stored; it lets the session be saved even when
    it overlaps other sessions.
    """

    allow_conflicts = serializers.BooleanField(default=False, write_only=True)

    class Meta:
        model = Session
        fields = [
            "title",
            "type",
            "start_time",
            "end_time",
            "priority",
            "completed",
            "description",
            "from_suggestion_id",
            "allow_conflicts",
        ]

    def validate_title(self, value):
        if not value.strip():
            raise serializers.ValidationError(_("Title cannot be blank"))
        return value.strip()

    def validate(self, data):
        """Validate that end time is after start time, including partial updates"""
        start_time = data.get("start_time", getattr(self.instance, "start_time", None))
        end_time = data.get("end_time", getattr(self.instance, "end_time", None))

        if start_time and end_time and end_time <= start_time:
            raise serializers.ValidationError({"end_time": _("End time must be after start time")})

        return data


class ConflictCheckSerializer(serializers.Serializer):
    """Serializer for checking a proposed interval against existing sessions"""

    start_time = serializers.DateTimeField()
    end_time = serializers.DateTimeField()
    exclude_session_id = serializers.UUIDField(required=False, allow_null=True)

    def validate(self, data):
        if data["end_time"] <= data["start_time"]:
            raise serializers.ValidationError({"end_time": _("End time must be after start time")})
        return data


class SessionStatsSerializer(serializers.Serializer):
    """Serializer for session statistics"""

    total = serializers.IntegerField()
    completed = serializers.IntegerField()
    pending = serializers.IntegerField()
    completion_rate = serializers.IntegerField()
    by_type = serializers.DictField(child=serializers.IntegerField())
    average_spacing_hours = serializers.FloatField(allow_null=True)
    current_streak_days = serializers.IntegerField()
    longest_streak_days = serializers.IntegerField()
    today = serializers.DictField(child=serializers.IntegerField())
    week = serializers.DictField(child=serializers.IntegerField())

    def to_representation(self, instance):
        data = super().to_representation(instance)
        # Keep every session type present, in declaration order
        data["by_type"] = {code: instance["by_type"].get(code, 0) for code in SessionType.values}
        return data
