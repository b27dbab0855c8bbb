# apps/availabilityapp/serializers.py
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from apps.availabilityapp.models import AvailabilityWindow

TIME_INPUT_FORMATS = ["%H:%M:%S", "%H:%M"]


class AvailabilityWindowSerializer(serializers.ModelSerializer):
    """Serializer for weekly availability windows"""

    day_of_week_display = serializers.CharField(
        source="get_day_of_week_display", read_only=True
    )
    start_time = serializers.TimeField(format="%H:%M:%S", input_formats=TIME_INPUT_FORMATS)
    end_time = serializers.TimeField(format="%H:%M:%S", input_formats=TIME_INPUT_FORMATS)

    class Meta:
        model = AvailabilityWindow
        fields = [
            "id",
            "day_of_week",
            "day_of_week_display",
            "start_time",
            "end_time",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "day_of_week_display", "created_at", "updated_at"]

    def validate(self, data):
        """Validate that end time is after start time, including partial updates"""
        start_time = data.get("start_time", getattr(self.instance, "start_time", None))
        end_time = data.get("end_time", getattr(self.instance, "end_time", None))

        if start_time and end_time and end_time <= start_time:
            raise serializers.ValidationError({"end_time": _("End time must be after start time")})

        return data
