# apps/suggestionapp/apps.py
from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class SuggestionAppConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.suggestionapp"
    verbose_name = _("Session Suggestions")
