# apps/sessionapp/models.py
import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import F, Q
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from model_utils import FieldTracker

from apps.sessionapp.enums import SessionType
from utils.constants import DEFAULT_PRIORITY, MAX_PRIORITY, MAX_TITLE_LENGTH, MIN_PRIORITY

# Fields handed to the suggestion engine and conflict detector
ENGINE_FIELDS = (
    "id",
    "title",
    "type",
    "start_time",
    "end_time",
    "completed",
    "completed_at",
    "deleted_at",
)


class SessionQuerySet(models.QuerySet):
    def active(self):
        """Sessions that have not been soft-deleted"""
        return self.filter(deleted_at__isnull=True)

    def overlapping(self, start_time, end_time):
        """Sessions sharing any instant with [start_time, end_time)"""
        return self.filter(start_time__lt=end_time, end_time__gt=start_time)

    def for_engine(self):
        """Plain dictionaries for the scheduling algorithms"""
        return self.values(*ENGINE_FIELDS)


class Session(models.Model):
    """A scheduled block of time for one activity"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sessions",
        verbose_name=_("User"),
    )
    title = models.CharField(_("Title"), max_length=MAX_TITLE_LENGTH)
    type = models.CharField(_("Type"), max_length=20, choices=SessionType.choices, db_index=True)
    start_time = models.DateTimeField(_("Start Time"), db_index=True)
    end_time = models.DateTimeField(_("End Time"), db_index=True)
    priority = models.PositiveSmallIntegerField(
        _("Priority"),
        default=DEFAULT_PRIORITY,
        validators=[MinValueValidator(MIN_PRIORITY), MaxValueValidator(MAX_PRIORITY)],
    )
    completed = models.BooleanField(_("Completed"), default=False)
    completed_at = models.DateTimeField(_("Completed At"), null=True, blank=True)
    description = models.TextField(_("Description"), blank=True, default="")
    from_suggestion_id = models.CharField(
        _("From Suggestion"), max_length=64, null=True, blank=True
    )
    deleted_at = models.DateTimeField(_("Deleted At"), null=True, blank=True, db_index=True)
    created_at = models.DateTimeField(_("Created At"), auto_now_add=True)
    updated_at = models.DateTimeField(_("Updated At"), auto_now=True)

    objects = SessionQuerySet.as_manager()

    # Track field changes for signals
    tracker = FieldTracker(fields=["start_time", "end_time", "completed"])

    class Meta:
        verbose_name = _("Session")
        verbose_name_plural = _("Sessions")
        ordering = ["start_time"]
        indexes = [
            models.Index(fields=["user", "start_time"], name="session_user_start_idx"),
            models.Index(fields=["user", "deleted_at"], name="session_user_deleted_idx"),
            models.Index(fields=["user", "type"], name="session_user_type_idx"),
            models.Index(fields=["user", "completed"], name="session_user_completed_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(end_time__gt=F("start_time")),
                name="session_end_after_start",
            ),
            models.CheckConstraint(
                condition=Q(priority__gte=MIN_PRIORITY, priority__lte=MAX_PRIORITY),
                name="session_priority_range",
            ),
            models.CheckConstraint(
                condition=Q(completed=True, completed_at__isnull=False)
                | Q(completed=False, completed_at__isnull=True),
                name="session_completed_has_timestamp",
            ),
            models.CheckConstraint(
                condition=Q(completed_at__isnull=True) | Q(completed_at__gte=F("start_time")),
                name="session_completed_after_start",
            ),
        ]

    def __str__(self):
        return f"{self.title} ({self.type}) {self.start_time:%Y-%m-%d %H:%M}"

    @property
    def is_deleted(self):
        return self.deleted_at is not None

    @property
    def duration_minutes(self):
        return int((self.end_time - self.start_time).total_seconds() // 60)

    def clean(self):
        """Validate session time constraints"""
        if self.start_time and self.end_time and self.end_time <= self.start_time:
            raise ValidationError({"end_time": _("End time must be after start time")})

        if self.completed_at and self.start_time and self.completed_at < self.start_time:
            raise ValidationError(
                {"completed_at": _("A session cannot be completed before it starts")}
            )

    def mark_completed(self, when=None):
        """Mark session as completed"""
        self.completed = True
        self.completed_at = when or timezone.now()
        self.save(update_fields=["completed", "completed_at", "updated_at"])

    def mark_incomplete(self):
        """Clear completion"""
        self.completed = False
        self.completed_at = None
        self.save(update_fields=["completed", "completed_at", "updated_at"])

    def soft_delete(self, when=None):
        """Hide the session from every scheduling computation"""
        self.deleted_at = when or timezone.now()
        self.save(update_fields=["deleted_at", "updated_at"])
