# products/services/catalog.py

"""
======================================================
PATH: products/services/catalog.py
======================================================
CATALOG SERVICES (PRODUCTS + CATEGORIES)

Purpose:
- Product create / update / duplicate / bulk edit.
- Category create / update / duplicate / delete with usage checks.

Rules:
- An empty attributes object is stored as NULL.
- categoryId None or "" clears the primary category; an unknown id is an error.
- subcategory ids must all exist AND have a parent.
- Setting discount_percentage recomputes sale_price from the product's price.
- Categories that still hold products are never deleted.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Iterable, Optional

from django.db import IntegrityError, transaction
from django.db.models import Count

from products.models import Category, Product, normalize_slug

from .exceptions import (
    CategoryInUseError,
    CategoryNotFound,
    DuplicateSlugError,
    InvalidParentError,
    InvalidSubcategoryError,
    NoUpdatesError,
)

logger = logging.getLogger("products")

RELATED_DEFAULT_LIMIT = 4

_PLAIN_PRODUCT_FIELDS = ("name", "description", "price", "image", "images", "featured")


# -----------------------------
# Helpers
# -----------------------------
def _clean_ids(ids: Iterable) -> list[str]:
    return list(dict.fromkeys(str(i).strip() for i in (ids or []) if str(i).strip()))


def resolve_category(category_id) -> Optional[Category]:
    if category_id in (None, ""):
        return None
    category = Category.objects.filter(pk=category_id).first()
    if category is None:
        raise CategoryNotFound("Category not found")
    return category


def resolve_subcategories(subcategory_ids: Iterable) -> list[Category]:
    wanted = _clean_ids(subcategory_ids)
    if not wanted:
        return []

    found = list(Category.objects.filter(pk__in=wanted, parent__isnull=False))
    if len(found) != len(wanted):
        raise InvalidSubcategoryError("One or more subcategories not found or invalid")
    return found


def normalize_attributes(value):
    if value is None:
        return None
    if isinstance(value, dict) and not value:
        return None
    return value


def _apply_product_changes(product: Product, changes: dict[str, Any]) -> Optional[list[Category]]:
    """
    Copy validated changes onto the instance. Returns the subcategory list to
    set after save (None = leave untouched).
    """
    for field in _PLAIN_PRODUCT_FIELDS:
        if field in changes:
            value = changes[field]
            if field == "images":
                value = list(value or [])
            elif field == "featured":
                value = bool(value)
            elif field == "description":
                value = value or ""
            elif field == "image":
                value = value or ""
            setattr(product, field, value)

    if "category_id" in changes:
        product.category = resolve_category(changes["category_id"])

    if "attributes" in changes:
        product.attributes = normalize_attributes(changes["attributes"])

    if "showcasing_sections" in changes:
        product.showcasing_sections = list(changes["showcasing_sections"] or [])

    if "discount_percentage" in changes:
        product.apply_discount(changes["discount_percentage"])
    elif "price" in changes and product.discount_percentage:
        product.apply_discount(product.discount_percentage)

    subcategories = None
    if "subcategory_ids" in changes:
        subcategories = resolve_subcategories(changes["subcategory_ids"])
    return subcategories


# -----------------------------
# Products
# -----------------------------
@transaction.atomic
def create_product(data: dict[str, Any]) -> Product:
    product = Product(featured=False)
    subcategories = _apply_product_changes(product, data)
    product.full_clean(exclude=["subcategories"])
    product.save()

    if subcategories is not None:
        product.subcategories.set(subcategories)

    logger.info("product created", extra={"product_id": str(product.id)})
    return product


@transaction.atomic
def update_product(product: Product, changes: dict[str, Any]) -> Product:
    subcategories = _apply_product_changes(product, changes)
    product.full_clean(exclude=["subcategories"])
    product.save()

    if subcategories is not None:
        product.subcategories.set(subcategories)
    return product


@transaction.atomic
def duplicate_product(product: Product) -> Product:
    copy = Product.objects.create(
        name=f"Copy of {product.name}",
        description=product.description,
        price=product.price,
        sale_price=product.sale_price,
        discount_percentage=product.discount_percentage,
        image=product.image,
        images=list(product.images or []),
        category=product.category,
        featured=False,
        attributes=product.attributes,
        showcasing_sections=list(product.showcasing_sections or []),
    )
    copy.subcategories.set(product.subcategories.all())

    logger.info(
        "product duplicated",
        extra={"product_id": str(product.id), "copy_id": str(copy.id)},
    )
    return copy


def related_products(product: Product, *, limit: int = RELATED_DEFAULT_LIMIT) -> list[Product]:
    """
    Same-category products first, topped up with featured products.
    """
    picked: list[Product] = []
    base = Product.objects.select_related("category").exclude(pk=product.pk)

    if product.category_id:
        picked.extend(base.filter(category_id=product.category_id).order_by("-featured", "-created_at")[:limit])

    if len(picked) < limit:
        seen = [p.pk for p in picked]
        picked.extend(
            base.filter(featured=True)
            .exclude(pk__in=seen)
            .order_by("-created_at")[: limit - len(picked)]
        )

    return picked


@transaction.atomic
def bulk_update_products(product_ids: Iterable, updates: dict[str, Any]) -> int:
    """
    Apply the same changes to many products.

    Supported keys: category_id, featured, price, discount_percentage,
    showcasing_sections, subcategory_ids.
    """
    ids = _clean_ids(product_ids)

    fields: dict[str, Any] = {}
    set_category = "category_id" in updates
    category = resolve_category(updates["category_id"]) if set_category else None

    if "featured" in updates and updates["featured"] is not None:
        fields["featured"] = bool(updates["featured"])
    if updates.get("price") is not None:
        fields["price"] = updates["price"]
    if "showcasing_sections" in updates:
        fields["showcasing_sections"] = list(updates["showcasing_sections"] or [])

    discount = updates.get("discount_percentage")

    subcategories = None
    if updates.get("subcategory_ids") is not None:
        subcategories = resolve_subcategories(updates["subcategory_ids"])

    if not fields and not set_category and discount is None and subcategories is None:
        raise NoUpdatesError("No valid updates provided")

    products = list(Product.objects.select_for_update().filter(pk__in=ids))
    for product in products:
        for field, value in fields.items():
            setattr(product, field, value)
        if set_category:
            product.category = category
        if discount is not None:
            product.apply_discount(discount)
        elif "price" in fields and product.discount_percentage:
            product.apply_discount(product.discount_percentage)
        product.save()

        if subcategories is not None:
            product.subcategories.set(subcategories)

    logger.info(
        "products bulk updated",
        extra={"count": len(products), "fields": sorted(updates.keys())},
    )
    return len(products)


@transaction.atomic
def bulk_delete_products(product_ids: Iterable) -> int:
    qs = Product.objects.filter(pk__in=_clean_ids(product_ids))
    count = qs.count()
    qs.delete()
    logger.info("products bulk deleted", extra={"count": count})
    return count


# -----------------------------
# Categories
# -----------------------------
def categories_with_quantity():
    return Category.objects.select_related("parent").annotate(quantity=Count("products", distinct=True))


def _slug_taken_message(existing: Category) -> str:
    return (
        f'A category with this slug already exists. The category "{existing.name}" '
        f'uses the slug "{existing.slug}". Please use a different name or slug.'
    )


def _ensure_slug_free(slug: str, *, exclude_pk=None) -> None:
    qs = Category.objects.filter(slug=slug)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    existing = qs.first()
    if existing is not None:
        raise DuplicateSlugError(_slug_taken_message(existing))


def _resolve_parent(parent_id, *, category: Optional[Category] = None) -> Optional[Category]:
    parent = resolve_category(parent_id)
    if parent is not None and category is not None and parent.pk == category.pk:
        raise InvalidParentError("A category cannot be its own parent")
    return parent


@transaction.atomic
def create_category(data: dict[str, Any]) -> Category:
    slug = normalize_slug(data.get("slug"))
    _ensure_slug_free(slug)

    try:
        category = Category.objects.create(
            name=data["name"].strip(),
            slug=slug,
            description=data.get("description") or "",
            image=data.get("image") or "",
            icon=data.get("icon") or "",
            parent=_resolve_parent(data.get("parent_id")),
        )
    except IntegrityError as exc:
        raise DuplicateSlugError(
            "A category with this slug already exists. Please use a different name or slug."
        ) from exc

    logger.info("category created", extra={"category_id": str(category.id), "slug": slug})
    return category


@transaction.atomic
def update_category(category: Category, changes: dict[str, Any]) -> Category:
    if "slug" in changes:
        slug = normalize_slug(changes["slug"])
        _ensure_slug_free(slug, exclude_pk=category.pk)
        category.slug = slug

    if "name" in changes:
        category.name = changes["name"].strip()
    for field in ("description", "image", "icon"):
        if field in changes:
            setattr(category, field, changes[field] or "")
    if "parent_id" in changes:
        category.parent = _resolve_parent(changes["parent_id"], category=category)

    category.save()
    return category


@transaction.atomic
def bulk_update_categories(category_ids: Iterable, changes: dict[str, Any]) -> int:
    """
    Shared description / image / icon / parent for many categories.
    """
    ids = _clean_ids(category_ids)
    fields = {f: changes[f] or "" for f in ("description", "image", "icon") if f in changes}
    if "parent_id" in changes:
        parent = resolve_category(changes["parent_id"])
        if parent is not None and str(parent.pk) in ids:
            raise InvalidParentError("A category cannot be its own parent")
        fields["parent"] = parent

    if not fields:
        raise NoUpdatesError("No valid updates provided")

    return Category.objects.filter(pk__in=ids).update(**fields)


@transaction.atomic
def delete_category(category: Category) -> None:
    count = category.products.count()
    if count:
        raise CategoryInUseError(
            f"Cannot delete category. It has {count} product(s) associated with it. "
            "Please remove or reassign the products first.",
            categories=[category.name],
        )
    category_id = str(category.pk)
    category.delete()
    logger.info("category deleted", extra={"category_id": category_id})


@transaction.atomic
def bulk_delete_categories(category_ids: Iterable) -> int:
    ids = _clean_ids(category_ids)
    categories = list(categories_with_quantity().filter(pk__in=ids))

    in_use = [c.name for c in categories if c.quantity]
    if in_use:
        raise CategoryInUseError(
            f"Cannot delete {len(in_use)} category/categories. They have products associated with them.",
            categories=in_use,
        )

    deletable = [c.pk for c in categories]
    Category.objects.filter(pk__in=deletable).delete()
    logger.info("categories bulk deleted", extra={"count": len(deletable)})
    return len(deletable)


@transaction.atomic
def duplicate_category(category: Category) -> Category:
    slug = f"{category.slug}-copy-{int(time.time() * 1000)}"
    _ensure_slug_free(slug)

    return Category.objects.create(
        name=f"Copy of {category.name}",
        slug=slug,
        description=category.description,
        image=category.image,
        icon=category.icon,
        parent=category.parent,
    )
