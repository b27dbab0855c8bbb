# apps/suggestionapp/urls.py
from django.urls import path

from apps.suggestionapp.views import SuggestionView

urlpatterns = [
    path("suggestions/", SuggestionView.as_view(), name="suggestions"),
]
