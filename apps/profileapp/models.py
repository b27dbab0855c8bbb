# apps/profileapp/models.py
import pytz
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _

DEFAULT_TIMEZONE = "UTC"


def validate_timezone(value):
    if value not in pytz.all_timezones_set:
        raise ValidationError(_("%(value)s is not a valid IANA timezone"), params={"value": value})


class Profile(models.Model):
    """Per-user scheduling preferences"""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
        verbose_name=_("User"),
    )
    timezone = models.CharField(
        _("Timezone"),
        max_length=64,
        default=DEFAULT_TIMEZONE,
        validators=[validate_timezone],
    )
    created_at = models.DateTimeField(_("Created At"), auto_now_add=True)
    updated_at = models.DateTimeField(_("Updated At"), auto_now=True)

    class Meta:
        verbose_name = _("Profile")
        verbose_name_plural = _("Profiles")

    def __str__(self):
        return f"{self.user} ({self.timezone})"
