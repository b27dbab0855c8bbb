# apps/profileapp/services/profile_service.py
import logging

from apps.profileapp.models import DEFAULT_TIMEZONE, Profile

logger = logging.getLogger(__name__)


class ProfileService:
    """Timezone source for scheduling computations"""

    @staticmethod
    def get_timezone(user):
        """
        Get the user's IANA timezone.

        Args:
            user: The user

        Returns:
            Timezone name, UTC when the user has no profile
        """
        timezone_name = (
            Profile.objects.filter(user=user).values_list("timezone", flat=True).first()
        )
        return timezone_name or DEFAULT_TIMEZONE

    @staticmethod
    def lock_profile(user):
        """
        Lock the user's profile row for the current transaction.

        Must be called inside ``transaction.atomic``. Serializes schedule
        writes for one user at the database level.
        """
        profile, created = Profile.objects.get_or_create(user=user)
        if created:
            logger.info(f"Created missing profile for user {user.pk}")
        return Profile.objects.select_for_update().get(pk=profile.pk)
