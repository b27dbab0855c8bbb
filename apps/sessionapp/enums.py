from django.db import models
from django.utils.translation import gettext_lazy as _


class SessionType(models.TextChoices):
    """Activity types a session can be scheduled for"""

    DEEP_WORK = "DEEP_WORK", _("Deep Work")
    WORKOUT = "WORKOUT", _("Workout")
    LANGUAGE = "LANGUAGE", _("Language")
    MEDITATION = "MEDITATION", _("Meditation")
    CLIENT_MEETING = "CLIENT_MEETING", _("Client Meeting")
    STUDY = "STUDY", _("Study")
    READING = "READING", _("Reading")
    OTHER = "OTHER", _("Other")
