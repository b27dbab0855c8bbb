# apps/profileapp/signals.py
import logging

from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver

from apps.profileapp.models import Profile

logger = logging.getLogger(__name__)


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def create_user_profile(sender, instance, created, **kwargs):
    """Every user gets a profile holding their timezone."""
    if created:
        Profile.objects.get_or_create(user=instance)
        logger.info(f"Profile created for user {instance.pk}")
