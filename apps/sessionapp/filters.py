# apps/sessionapp/filters.py
from django.utils import timezone
from django_filters import rest_framework as filters

from apps.profileapp.services.profile_service import ProfileService
from apps.sessionapp.enums import SessionType
from apps.sessionapp.models import Session
from apps.sessionapp.utils.date_utils import local_day_bounds, local_week_bounds


class SessionFilter(filters.FilterSet):
    """Filter sessions by type, completion and time range"""

    type = filters.ChoiceFilter(choices=SessionType.choices)
    completed = filters.BooleanFilter()
    start_after = filters.IsoDateTimeFilter(field_name="start_time", lookup_expr="gte")
    start_before = filters.IsoDateTimeFilter(field_name="start_time", lookup_expr="lt")
    today = filters.BooleanFilter(method="filter_today")
    this_week = filters.BooleanFilter(method="filter_this_week")

    class Meta:
        model = Session
        fields = ["type", "completed", "start_after", "start_before", "today", "this_week"]

    def _timezone_name(self):
        return ProfileService.get_timezone(self.request.user)

    def filter_today(self, queryset, name, value):
        """Sessions starting on the user's local calendar day"""
        if not value:
            return queryset
        start, end = local_day_bounds(timezone.now(), self._timezone_name())
        return queryset.filter(start_time__gte=start, start_time__lt=end)

    def filter_this_week(self, queryset, name, value):
        """Sessions starting in the user's local week (Sunday to Saturday)"""
        if not value:
            return queryset
        start, end = local_week_bounds(timezone.now(), self._timezone_name())
        return queryset.filter(start_time__gte=start, start_time__lt=end)
