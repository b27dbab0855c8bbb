from django.db import models
from django.utils.translation import gettext_lazy as _


class DayOfWeek(models.TextChoices):
    """Day of week (MON..SUN, Monday first)"""

    MONDAY = "MON", _("Monday")
    TUESDAY = "TUE", _("Tuesday")
    WEDNESDAY = "WED", _("Wednesday")
    THURSDAY = "THU", _("Thursday")
    FRIDAY = "FRI", _("Friday")
    SATURDAY = "SAT", _("Saturday")
    SUNDAY = "SUN", _("Sunday")
