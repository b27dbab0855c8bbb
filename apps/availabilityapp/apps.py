# apps/availabilityapp/apps.py
from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class AvailabilityAppConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.availabilityapp"
    verbose_name = _("Weekly Availability")
