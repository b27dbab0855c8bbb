# apps/sessionapp/apps.py
from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class SessionAppConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.sessionapp"
    verbose_name = _("Scheduled Sessions")

    def ready(self):
        import apps.sessionapp.signals  # noqa
