# products/admin.py
"""
=====================================================
PATH: products/admin.py
=====================================================

Catalog admin. Bulk edits and exports live in the API; this is for
one-off fixes.
"""

from django.contrib import admin

from products.models import Category, Product


# =====================================================
# CATEGORY
# =====================================================

@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "parent", "created_at")
    list_filter = ("parent",)
    search_fields = ("name", "slug")
    ordering = ("name",)
    readonly_fields = ("created_at", "updated_at")


# =====================================================
# PRODUCT
# =====================================================

@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "category",
        "price",
        "sale_price",
        "discount_percentage",
        "featured",
        "created_at",
    )
    list_filter = ("featured", "category", "created_at")
    search_fields = ("name", "description")
    ordering = ("-created_at",)
    readonly_fields = ("sale_price", "created_at", "updated_at")
    filter_horizontal = ("subcategories",)

    def save_model(self, request, obj, form, change):
        obj.apply_discount(obj.discount_percentage)
        super().save_model(request, obj, form, change)
