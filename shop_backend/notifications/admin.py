# notifications/admin.py

from django.contrib import admin

from notifications.models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("title", "type", "user", "read", "is_scheduled", "scheduled_for", "created_at")
    list_filter = ("type", "read", "is_scheduled")
    search_fields = ("title", "message", "user__email")
    ordering = ("-created_at",)
    readonly_fields = ("created_at", "updated_at")
