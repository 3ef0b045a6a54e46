# salons/admin.py
"""
=====================================================
PATH: salons/admin.py
=====================================================

Salon listings. Reviews go through the API so owners get notified.
"""

from django.contrib import admin

from salons.models import Salon


@admin.register(Salon)
class SalonAdmin(admin.ModelAdmin):
    list_display = ("name", "city", "status", "is_active", "is_bio_diamond", "user", "created_at")
    list_filter = ("status", "is_active", "is_bio_diamond", "city")
    search_fields = ("name", "address", "city", "email")
    ordering = ("-is_bio_diamond", "city", "name")
    raw_id_fields = ("user", "reviewed_by")
    readonly_fields = ("reviewed_by", "reviewed_at", "created_at", "updated_at")
