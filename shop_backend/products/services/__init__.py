from .catalog import (
    bulk_delete_categories,
    bulk_delete_products,
    bulk_update_categories,
    bulk_update_products,
    create_category,
    create_product,
    delete_category,
    duplicate_category,
    duplicate_product,
    related_products,
    update_category,
    update_product,
)

__all__ = [
    "bulk_delete_categories",
    "bulk_delete_products",
    "bulk_update_categories",
    "bulk_update_products",
    "create_category",
    "create_product",
    "delete_category",
    "duplicate_category",
    "duplicate_product",
    "related_products",
    "update_category",
    "update_product",
]
