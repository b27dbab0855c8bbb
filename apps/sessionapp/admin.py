# apps/sessionapp/admin.py
from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from apps.sessionapp.models import Session


@admin.register(Session)
class SessionAdmin(admin.ModelAdmin):
    """Admin configuration for sessions"""

    list_display = [
        "title",
        "user",
        "type",
        "start_time",
        "end_time",
        "priority",
        "completed",
        "is_deleted",
    ]
    list_filter = ["type", "completed", "priority"]
    search_fields = ["title", "user__username"]
    date_hierarchy = "start_time"
    readonly_fields = ["id", "completed_at", "deleted_at", "created_at", "updated_at"]

    fieldsets = (
        (None, {"fields": ("id", "user", "title", "type", "priority", "description")}),
        (_("Timing"), {"fields": ("start_time", "end_time")}),
        (_("Status"), {"fields": ("completed", "completed_at", "deleted_at")}),
        (
            _("Metadata"),
            {"fields": ("from_suggestion_id", "created_at", "updated_at"), "classes": ("collapse",)},
        ),
    )

    @admin.display(boolean=True, description=_("Deleted"))
    def is_deleted(self, obj):
        return obj.is_deleted
