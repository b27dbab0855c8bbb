# apps/sessionapp/signals.py
import logging

from django.db.models.signals import post_save
from django.dispatch import receiver

from apps.sessionapp.models import Session

logger = logging.getLogger(__name__)


@receiver(post_save, sender=Session)
def session_post_save(sender, instance, created, **kwargs):
    """
    Handle post-save signal for Sessions.
    Logs creation, reschedules and completion changes.
    """
    if created:
        logger.info(
            f"Session created: ID={instance.id}, User={instance.user_id}, "
            f"Type={instance.type}, Time={instance.start_time.isoformat()}"
            + (f", FromSuggestion={instance.from_suggestion_id}" if instance.from_suggestion_id else "")
        )
        return

    if instance.tracker.has_changed("start_time") or instance.tracker.has_changed("end_time"):
        previous_start = instance.tracker.previous("start_time")
        previous_end = instance.tracker.previous("end_time")
        logger.info(
            f"Session rescheduled: ID={instance.id}, "
            f"From={previous_start.isoformat() if previous_start else None}"
            f"..{previous_end.isoformat() if previous_end else None}, "
            f"To={instance.start_time.isoformat()}..{instance.end_time.isoformat()}"
        )

    if instance.tracker.has_changed("completed"):
        logger.info(f"Session {instance.id} completed={instance.completed}")
