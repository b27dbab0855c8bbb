"""
Availability app views.
Handles the weekly availability windows that feed suggestion generation.
"""

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import permissions, viewsets

from apps.availabilityapp.filters import AvailabilityWindowFilter
from apps.availabilityapp.models import AvailabilityWindow
from apps.availabilityapp.serializers import AvailabilityWindowSerializer
from core.mixins import OwnedQuerysetMixin


class AvailabilityWindowViewSet(OwnedQuerysetMixin, viewsets.ModelViewSet):
    """
    API endpoint for managing weekly availability windows.

    Windows on the same day may overlap; they are merged when suggestions
    are computed.
    """

    queryset = AvailabilityWindow.objects.in_week_order()
    serializer_class = AvailabilityWindowSerializer
    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_class = AvailabilityWindowFilter
