# megamenu/admin.py
"""
Card edits made here bypass the API, so the storefront cache is cleared on save.
"""

from django.contrib import admin

from megamenu.models import MegaMenuCard
from megamenu.services import invalidate_cache


@admin.register(MegaMenuCard)
class MegaMenuCardAdmin(admin.ModelAdmin):
    list_display = ("menu_type", "position", "link_url", "is_active", "updated_at")
    list_filter = ("menu_type", "is_active")
    ordering = ("menu_type", "position")

    def save_model(self, request, obj, form, change):
        super().save_model(request, obj, form, change)
        invalidate_cache()

    def delete_model(self, request, obj):
        super().delete_model(request, obj)
        invalidate_cache()
