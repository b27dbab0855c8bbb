# apps/availabilityapp/models.py
import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Case, F, IntegerField, Q, Value, When
from django.utils.translation import gettext_lazy as _

from apps.availabilityapp.enums import DayOfWeek
from utils.constants import WEEKDAY_CODES


class AvailabilityWindowQuerySet(models.QuerySet):
    def in_week_order(self):
        """Order by weekday (Monday first), then start time"""
        weekday_order = Case(
            *[When(day_of_week=code, then=Value(index)) for index, code in enumerate(WEEKDAY_CODES)],
            output_field=IntegerField(),
        )
        return self.annotate(weekday_order=weekday_order).order_by("weekday_order", "start_time")


class AvailabilityWindow(models.Model):
    """Recurring weekly window during which a user is willing to be scheduled"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="availability_windows",
        verbose_name=_("User"),
    )
    day_of_week = models.CharField(
        _("Day of Week"), max_length=3, choices=DayOfWeek.choices, db_index=True
    )
    start_time = models.TimeField(_("Start Time"))
    end_time = models.TimeField(_("End Time"))
    created_at = models.DateTimeField(_("Created At"), auto_now_add=True)
    updated_at = models.DateTimeField(_("Updated At"), auto_now=True)

    objects = AvailabilityWindowQuerySet.as_manager()

    class Meta:
        verbose_name = _("Availability Window")
        verbose_name_plural = _("Availability Windows")
        ordering = ["day_of_week", "start_time"]
        indexes = [
            models.Index(fields=["user", "day_of_week"], name="availability_user_day_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(end_time__gt=F("start_time")),
                name="availability_end_after_start",
            ),
        ]

    def __str__(self):
        return f"{self.get_day_of_week_display()} {self.start_time:%H:%M}-{self.end_time:%H:%M}"

    def clean(self):
        """Validate the window is a non-empty interval"""
        if self.start_time and self.end_time and self.end_time <= self.start_time:
            raise ValidationError({"end_time": _("End time must be after start time")})
