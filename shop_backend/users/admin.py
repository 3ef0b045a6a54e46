# users/admin.py

"""
USERS ADMIN REGISTRATION

Registers the custom User model and the banned-email list in Django Admin.
The React admin console is the day-to-day tool; this is the fallback.
"""

from __future__ import annotations

from django.contrib import admin
from django.contrib.auth import get_user_model
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

from users.models import BannedEmail

User = get_user_model()


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    ordering = ("email",)
    list_display = ("email", "name", "role", "user_type", "is_active", "last_login")
    list_filter = ("role", "user_type", "is_active", "is_superuser")
    search_fields = ("email", "name")

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        ("Profile", {"fields": ("name", "role", "user_type", "image", "shipping_address", "certificate_url")}),
        ("Capability overrides", {"fields": ("permissions",)}),
        (
            "Access",
            {
                "fields": (
                    "is_active",
                    "is_staff",
                    "is_superuser",
                    "groups",
                    "user_permissions",
                )
            },
        ),
        ("Dates", {"fields": ("last_login",)}),
    )

    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": (
                    "email",
                    "name",
                    "password1",
                    "password2",
                    "role",
                    "is_active",
                ),
            },
        ),
    )


@admin.register(BannedEmail)
class BannedEmailAdmin(admin.ModelAdmin):
    list_display = ("email", "reason", "banned_by", "created_at")
    search_fields = ("email", "reason")
    ordering = ("-created_at",)
    readonly_fields = ("created_at",)
