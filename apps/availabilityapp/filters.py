# apps/availabilityapp/filters.py
from django_filters import rest_framework as filters

from apps.availabilityapp.enums import DayOfWeek
from apps.availabilityapp.models import AvailabilityWindow


class AvailabilityWindowFilter(filters.FilterSet):
    """Filter availability windows by weekday"""

    day_of_week = filters.ChoiceFilter(choices=DayOfWeek.choices)

    class Meta:
        model = AvailabilityWindow
        fields = ["day_of_week"]
