"""
Suggestion app views.
Proposes ranked time slots for a new session.
"""

from rest_framework import permissions
from rest_framework.views import APIView

from apps.suggestionapp.serializers import SuggestionRequestSerializer, SuggestionSerializer
from apps.suggestionapp.services.suggestion_service import SuggestionService
from core.utils.pagination import suggestion_page_response


class SuggestionView(APIView):
    """
    API endpoint for slot suggestions.

    Accepts the request as a JSON body (POST) or query parameters (GET) and
    returns one page of suggestions ordered by score.
    """

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        """Get suggestions from query parameters"""
        return self._suggest(request, request.query_params)

    def post(self, request):
        """Get suggestions from a JSON body"""
        return self._suggest(request, request.data)

    def _suggest(self, request, data):
        serializer = SuggestionRequestSerializer(data=data)
        serializer.is_valid(raise_exception=True)

        page = SuggestionService.get_suggestions(request.user, serializer.to_request())

        results = SuggestionSerializer(page["results"], many=True).data
        return suggestion_page_response(page, results)
