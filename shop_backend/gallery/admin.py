# gallery/admin.py

from django.contrib import admin

from gallery.models import GalleryItem


@admin.register(GalleryItem)
class GalleryItemAdmin(admin.ModelAdmin):
    list_display = ("name", "type", "folder", "mime_type", "size", "created_at")
    list_filter = ("type",)
    search_fields = ("name", "description")
    raw_id_fields = ("folder",)
    readonly_fields = ("url", "mime_type", "size", "created_at", "updated_at")
