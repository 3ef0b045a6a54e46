# audit/admin.py

from django.contrib import admin

from audit.models import AdminLog


@admin.register(AdminLog)
class AdminLogAdmin(admin.ModelAdmin):
    """
    Read-only: the trail is written by the API, never edited by hand.
    """

    list_display = ("created_at", "user", "action_type", "resource_type", "resource_id", "ip_address")
    list_filter = ("action_type", "resource_type")
    search_fields = ("description", "resource_id", "user__email")
    ordering = ("-created_at",)

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
