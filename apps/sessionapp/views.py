"""
Session app views.
Handles session CRUD, completion toggling, conflict checks and statistics.
"""

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.response import Response

from apps.sessionapp.filters import SessionFilter
from apps.sessionapp.models import Session
from apps.sessionapp.serializers import (
    ConflictCheckSerializer,
    SessionSerializer,
    SessionStatsSerializer,
    SessionWriteSerializer,
)
from apps.sessionapp.services.conflict_service import ConflictService
from apps.sessionapp.services.session_service import SessionService
from apps.sessionapp.services.stats_service import SessionStatsService
from core.mixins import OwnedQuerysetMixin
from core.utils.pagination import StandardResultsSetPagination


class SessionViewSet(OwnedQuerysetMixin, viewsets.ModelViewSet):
    """
    API endpoint for managing sessions.

    Provides CRUD operations with additional actions for:
    - Toggling completion
    - Checking a proposed interval for conflicts
    - Session statistics

    Writes are rejected with 409 when they overlap other sessions, unless the
    body carries ``allow_conflicts: true``. Deletes are soft.
    """

    queryset = Session.objects.active()
    serializer_class = SessionSerializer
    permission_classes = [permissions.IsAuthenticated]
    pagination_class = StandardResultsSetPagination
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = SessionFilter
    ordering_fields = ["start_time", "priority", "created_at"]
    ordering = ["start_time"]

    def get_serializer_class(self):
        if self.action in ["create", "update", "partial_update"]:
            return SessionWriteSerializer
        return SessionSerializer

    def create(self, request, *args, **kwargs):
        """Create a session, rejecting overlaps unless allowed"""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = dict(serializer.validated_data)
        allow_conflicts = data.pop("allow_conflicts", False)

        session = SessionService.create_session(
            user=request.user, data=data, allow_conflicts=allow_conflicts
        )

        return Response(SessionSerializer(session).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        """Update a session, re-checking conflicts when its time changes"""
        partial = kwargs.pop("partial", False)
        instance = self.get_object()

        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        data = dict(serializer.validated_data)
        allow_conflicts = data.pop("allow_conflicts", False)

        session = SessionService.update_session(
            user=request.user,
            session_id=instance.id,
            data=data,
            allow_conflicts=allow_conflicts,
        )

        return Response(SessionSerializer(session).data)

    def destroy(self, request, *args, **kwargs):
        """Soft-delete a session"""
        instance = self.get_object()
        SessionService.delete_session(user=request.user, session_id=instance.id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["post"], url_path="toggle-complete")
    def toggle_complete(self, request, pk=None):
        """Flip the completion status of a session"""
        instance = self.get_object()
        session = SessionService.toggle_complete(user=request.user, session_id=instance.id)
        return Response(SessionSerializer(session).data)

    @action(detail=False, methods=["post"], url_path="check-conflicts")
    def check_conflicts(self, request):
        """Check a proposed interval against the user's sessions"""
        serializer = ConflictCheckSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = ConflictService.check_conflicts(
            user=request.user,
            start_time=serializer.validated_data["start_time"],
            end_time=serializer.validated_data["end_time"],
            exclude_session_id=serializer.validated_data.get("exclude_session_id"),
        )

        return Response(result)

    @action(detail=False, methods=["get"])
    def stats(self, request):
        """Get statistics over the user's sessions"""
        stats = SessionStatsService.get_stats(request.user)
        return Response(SessionStatsSerializer(stats).data)
