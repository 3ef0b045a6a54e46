# products/services/transfer.py

"""
CATALOG EXPORT / IMPORT (JSON FILES)

Used by manage.py export_products / import_products to move a catalog
between environments.

File shape:
    {"exportDate", "version", "products": [...], "categories": [...]}

Import rules:
- categories are matched by slug; parents are remapped to the local ids
- products are matched by id; existing rows are skipped or updated
- one bad product does not stop the rest (it is counted as an error)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction
from django.utils import timezone

from products.models import Category, Product, discounted_price, normalize_slug

logger = logging.getLogger("products")

EXPORT_VERSION = "1.0"

MODE_SKIP = "skip"
MODE_UPDATE = "update"


def _category_dict(category: Category) -> dict[str, Any]:
    return {
        "id": str(category.id),
        "name": category.name,
        "slug": category.slug,
        "description": category.description,
        "image": category.image,
        "icon": category.icon,
        "parentId": str(category.parent_id) if category.parent_id else None,
    }


def _product_dict(product: Product) -> dict[str, Any]:
    return {
        "id": str(product.id),
        "name": product.name,
        "description": product.description,
        "price": str(product.price),
        "salePrice": str(product.sale_price) if product.sale_price is not None else None,
        "discountPercentage": product.discount_percentage,
        "image": product.image,
        "images": product.images,
        "featured": product.featured,
        "categoryId": str(product.category_id) if product.category_id else None,
        "attributes": product.attributes,
        "showcasingSections": product.showcasing_sections,
        "subcategoryIds": [str(c.id) for c in product.subcategories.all()],
        "createdAt": product.created_at.isoformat(),
        "updatedAt": product.updated_at.isoformat(),
    }


def build_export_payload() -> dict[str, Any]:
    products = list(
        Product.objects.select_related("category", "category__parent")
        .prefetch_related("subcategories")
        .order_by("created_at")
    )

    categories: dict[str, Category] = {}
    for product in products:
        related = [product.category] if product.category else []
        related.extend(product.subcategories.all())
        for category in related:
            if category.parent is not None:
                categories.setdefault(str(category.parent.id), category.parent)
            categories.setdefault(str(category.id), category)

    # parents before children so imports can remap parentId in one pass
    ordered = sorted(categories.values(), key=lambda c: (c.parent_id is not None, c.name))

    return {
        "exportDate": timezone.now().isoformat(),
        "version": EXPORT_VERSION,
        "products": [_product_dict(p) for p in products],
        "categories": [_category_dict(c) for c in ordered],
    }


@dataclass
class ImportStats:
    categories_created: int = 0
    categories_skipped: int = 0
    products_created: int = 0
    products_updated: int = 0
    products_skipped: int = 0
    products_errored: int = 0


def _import_categories(rows, stats: ImportStats) -> dict[str, Category]:
    id_map: dict[str, Category] = {}

    for row in rows:
        slug = normalize_slug(row.get("slug"))
        if not slug:
            continue

        existing = Category.objects.filter(slug=slug).first()
        if existing is not None:
            id_map[str(row.get("id"))] = existing
            stats.categories_skipped += 1
            continue

        parent = id_map.get(str(row.get("parentId"))) if row.get("parentId") else None
        created = Category.objects.create(
            name=row.get("name") or slug,
            slug=slug,
            description=row.get("description") or "",
            image=row.get("image") or "",
            icon=row.get("icon") or "",
            parent=parent,
        )
        id_map[str(row.get("id"))] = created
        stats.categories_created += 1

    return id_map


def _product_fields(row: dict[str, Any], id_map: dict[str, Category]) -> dict[str, Any]:
    price = Decimal(str(row["price"]))
    discount = row.get("discountPercentage")
    attributes = row.get("attributes")
    return {
        "name": row["name"],
        "description": row.get("description") or "",
        "price": price,
        "discount_percentage": discount,
        "sale_price": discounted_price(price, discount),
        "image": row.get("image") or "",
        "images": list(row.get("images") or []),
        "featured": bool(row.get("featured")),
        "category": id_map.get(str(row.get("categoryId"))) if row.get("categoryId") else None,
        "attributes": attributes or None,
        "showcasing_sections": list(row.get("showcasingSections") or []),
    }


def import_payload(payload: dict[str, Any], *, mode: str = MODE_SKIP) -> ImportStats:
    if not isinstance(payload.get("products"), list):
        raise ValueError('Invalid export file format. Expected "products" array.')

    stats = ImportStats()

    with transaction.atomic():
        id_map = _import_categories(payload.get("categories") or [], stats)

    for row in payload["products"]:
        try:
            with transaction.atomic():
                fields = _product_fields(row, id_map)
                subcategories = [
                    id_map[str(sid)] for sid in row.get("subcategoryIds") or [] if str(sid) in id_map
                ]

                product = Product.objects.filter(pk=row.get("id")).first() if row.get("id") else None
                if product is not None and mode != MODE_UPDATE:
                    stats.products_skipped += 1
                    continue

                if product is None:
                    if row.get("id"):
                        fields["id"] = row["id"]
                    product = Product.objects.create(**fields)
                    stats.products_created += 1
                else:
                    for field, value in fields.items():
                        setattr(product, field, value)
                    product.save()
                    stats.products_updated += 1

                product.subcategories.set(subcategories)
        except (KeyError, TypeError, ValueError, InvalidOperation, DatabaseError, ValidationError):
            stats.products_errored += 1
            logger.exception("product import failed", extra={"product_id": row.get("id")})

    return stats
