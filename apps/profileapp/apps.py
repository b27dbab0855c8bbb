# apps/profileapp/apps.py
from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class ProfileAppConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.profileapp"
    verbose_name = _("User Profiles")

    def ready(self):
        import apps.profileapp.signals  # noqa
