import uuid

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Session",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("title", models.CharField(max_length=256, verbose_name="Title")),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("DEEP_WORK", "Deep Work"),
                            ("WORKOUT", "Workout"),
                            ("LANGUAGE", "Language"),
                            ("MEDITATION", "Meditation"),
                            ("CLIENT_MEETING", "Client Meeting"),
                            ("STUDY", "Study"),
                            ("READING", "Reading"),
                            ("OTHER", "Other"),
                        ],
                        db_index=True,
                        max_length=20,
                        verbose_name="Type",
                    ),
                ),
                ("start_time", models.DateTimeField(db_index=True, verbose_name="Start Time")),
                ("end_time", models.DateTimeField(db_index=True, verbose_name="End Time")),
                (
                    "priority",
                    models.PositiveSmallIntegerField(
                        default=3,
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(5),
                        ],
                        verbose_name="Priority",
                    ),
                ),
                ("completed", models.BooleanField(default=False, verbose_name="Completed")),
                (
                    "completed_at",
                    models.DateTimeField(blank=True, null=True, verbose_name="Completed At"),
                ),
                (
                    "description",
                    models.TextField(blank=True, default="", verbose_name="Description"),
                ),
                (
                    "from_suggestion_id",
                    models.CharField(
                        blank=True, max_length=64, null=True, verbose_name="From Suggestion"
                    ),
                ),
                (
                    "deleted_at",
                    models.DateTimeField(
                        blank=True, db_index=True, null=True, verbose_name="Deleted At"
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="sessions",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="User",
                    ),
                ),
            ],
            options={
                "verbose_name": "Session",
                "verbose_name_plural": "Sessions",
                "ordering": ["start_time"],
                "indexes": [
                    models.Index(fields=["user", "start_time"], name="session_user_start_idx"),
                    models.Index(fields=["user", "deleted_at"], name="session_user_deleted_idx"),
                    models.Index(fields=["user", "type"], name="session_user_type_idx"),
                    models.Index(fields=["user", "completed"], name="session_user_completed_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("end_time__gt", models.F("start_time"))),
                        name="session_end_after_start",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("priority__gte", 1), ("priority__lte", 5)),
                        name="session_priority_range",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(("completed", True), ("completed_at__isnull", False)),
                            models.Q(("completed", False), ("completed_at__isnull", True)),
                            _connector="OR",
                        ),
                        name="session_completed_has_timestamp",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            ("completed_at__isnull", True),
                            ("completed_at__gte", models.F("start_time")),
                            _connector="OR",
                        ),
                        name="session_completed_after_start",
                    ),
                ],
            },
        ),
    ]
