# apps/suggestionapp/serializers.py
from rest_framework import serializers

from algorithms.suggestion_engine import SuggestionRequest
from apps.sessionapp.enums import SessionType
from utils.constants import (
    DEFAULT_LOOK_AHEAD_DAYS,
    DEFAULT_PRIORITY,
    DEFAULT_SUGGESTION_LIMIT,
    MAX_DURATION_MINUTES,
    MAX_LOOK_AHEAD_DAYS,
    MAX_PRIORITY,
    MAX_SUGGESTION_LIMIT,
    MIN_LOOK_AHEAD_DAYS,
    MIN_PRIORITY,
)


class SuggestionRequestSerializer(serializers.Serializer):
    """Serializer for suggestion requests"""

    type = serializers.ChoiceField(choices=SessionType.choices)
    duration_minutes = serializers.IntegerField(min_value=1, max_value=MAX_DURATION_MINUTES)
    priority = serializers.IntegerField(
        min_value=MIN_PRIORITY, max_value=MAX_PRIORITY, default=DEFAULT_PRIORITY
    )
    look_ahead_days = serializers.IntegerField(
        min_value=MIN_LOOK_AHEAD_DAYS,
        max_value=MAX_LOOK_AHEAD_DAYS,
        default=DEFAULT_LOOK_AHEAD_DAYS,
    )
    limit = serializers.IntegerField(
        min_value=1, max_value=MAX_SUGGESTION_LIMIT, default=DEFAULT_SUGGESTION_LIMIT
    )
    offset = serializers.IntegerField(min_value=0, default=0)

    def to_request(self) -> SuggestionRequest:
        data = self.validated_data
        return SuggestionRequest(
            session_type=data["type"],
            duration_minutes=data["duration_minutes"],
            priority=data["priority"],
            look_ahead_days=data["look_ahead_days"],
            limit=data["limit"],
            offset=data["offset"],
        )


class SuggestionSerializer(serializers.Serializer):
    """Serializer for a suggested slot"""

    id = serializers.CharField()
    title = serializers.CharField()
    type = serializers.CharField()
    start_time = serializers.DateTimeField()
    end_time = serializers.DateTimeField()
    priority = serializers.IntegerField()
    description = serializers.CharField(allow_null=True)
    score = serializers.IntegerField()
    reasons = serializers.ListField(child=serializers.CharField())
