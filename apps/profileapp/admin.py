# apps/profileapp/admin.py
from django.contrib import admin

from apps.profileapp.models import Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    """Admin configuration for profiles"""

    list_display = ["user", "timezone", "created_at"]
    search_fields = ["user__username", "timezone"]
    readonly_fields = ["created_at", "updated_at"]
