# social/admin.py

from django.contrib import admin

from social.models import SocialMediaPost


@admin.register(SocialMediaPost)
class SocialMediaPostAdmin(admin.ModelAdmin):
    list_display = ("platform", "content_type", "status", "scheduled_date", "created_by", "assigned_reviewer")
    list_filter = ("platform", "content_type", "status")
    search_fields = ("caption",)
    date_hierarchy = "scheduled_date"
    ordering = ("scheduled_date",)
    raw_id_fields = ("created_by", "assigned_reviewer", "reviewed_by")
    readonly_fields = ("reviewed_by", "reviewed_at", "created_at", "updated_at")
