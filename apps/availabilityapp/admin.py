# apps/availabilityapp/admin.py
from django.contrib import admin

from apps.availabilityapp.models import AvailabilityWindow


@admin.register(AvailabilityWindow)
class AvailabilityWindowAdmin(admin.ModelAdmin):
    """Admin configuration for availability windows"""

    list_display = ["user", "day_of_week", "start_time", "end_time"]
    list_filter = ["day_of_week"]
    search_fields = ["user__username"]
    readonly_fields = ["created_at", "updated_at"]
