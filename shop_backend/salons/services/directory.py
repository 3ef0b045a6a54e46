# salons/services/directory.py

"""
======================================================
PATH: salons/services/directory.py
======================================================
SALON LISTINGS (CREATE / EDIT / DELETE)

Ownership:
- A customer owns at most one salon; their listing always carries their
  account email and starts in PENDING_REVIEW.
- Staff-created listings have no owner and are APPROVED straight away.
- Owners may only touch their own listing. Editing a REJECTED listing sends
  it back to review.

Input cleaning:
- Trimmed empty strings are stored as NULL.
- working_hours keeps an object; a JSON string is parsed; anything else is
  stored as NULL.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from django.db import transaction

from salons.models import Salon

from .exceptions import SalonAlreadyExistsError, SalonForbidden

logger = logging.getLogger("salons")

TEXT_FIELDS = (
    "name",
    "address",
    "city",
    "postal_code",
    "phone",
    "email",
    "website",
    "image",
    "logo",
    "description",
)

# staff-only switches; owners never change these directly
STAFF_FIELDS = ("is_bio_diamond", "is_active")


# -----------------------------
# Input cleaning
# -----------------------------
def clean_text(value) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def normalize_working_hours(value) -> Optional[dict]:
    if isinstance(value, dict):
        return value
    if isinstance(value, str) and value.strip():
        try:
            parsed = json.loads(value)
        except ValueError:
            return None
        return parsed if isinstance(parsed, dict) else None
    return None


def clean_images(value) -> list[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [str(v).strip() for v in value if isinstance(v, str) and v.strip()]


def _apply_changes(salon: Salon, changes: dict[str, Any], *, allow_staff_fields: bool) -> None:
    for field in TEXT_FIELDS:
        if field in changes:
            setattr(salon, field, clean_text(changes[field]))

    for field in ("latitude", "longitude"):
        if field in changes:
            value = changes[field]
            setattr(salon, field, float(value) if value not in (None, "") else None)

    if "images" in changes:
        salon.images = clean_images(changes["images"])

    if "working_hours" in changes:
        salon.working_hours = normalize_working_hours(changes["working_hours"])

    if allow_staff_fields:
        for field in STAFF_FIELDS:
            if field in changes and changes[field] is not None:
                setattr(salon, field, bool(changes[field]))


def _ensure_owner(salon: Salon, user, *, is_admin: bool) -> None:
    if is_admin:
        return
    if salon.user_id is None or salon.user_id != user.pk:
        raise SalonForbidden("Unauthorized - You can only edit your own salon")


# -----------------------------
# Lookups
# -----------------------------
def salon_for_user(user) -> Optional[Salon]:
    return Salon.objects.filter(user=user).first()


def visible_to(salon: Salon, user, *, is_admin: bool) -> bool:
    if is_admin or salon.is_public:
        return True
    return bool(user and user.is_authenticated and salon.user_id == user.pk)


# -----------------------------
# Mutations
# -----------------------------
@transaction.atomic
def create_salon(user, data: dict[str, Any], *, is_admin: bool) -> Salon:
    """
    Customers create their own pending listing; staff create approved,
    ownerless listings.
    """
    salon = Salon()

    if is_admin:
        _apply_changes(salon, data, allow_staff_fields=True)
        salon.status = Salon.Status.APPROVED
        salon.user = None
    else:
        if Salon.objects.select_for_update().filter(user=user).exists():
            raise SalonAlreadyExistsError(
                "You already have a salon listing. Please edit your existing salon instead."
            )
        _apply_changes(salon, data, allow_staff_fields=False)
        salon.status = Salon.Status.PENDING_REVIEW
        salon.user = user
        salon.email = user.email

    salon.save()
    logger.info(
        "salon created",
        extra={"salon_id": str(salon.id), "status": salon.status, "owner_id": str(salon.user_id or "")},
    )
    return salon


@transaction.atomic
def update_salon(salon: Salon, user, changes: dict[str, Any], *, is_admin: bool) -> Salon:
    _ensure_owner(salon, user, is_admin=is_admin)

    _apply_changes(salon, changes, allow_staff_fields=is_admin)

    if not is_admin:
        salon.email = user.email
        if salon.status == Salon.Status.REJECTED:
            salon.status = Salon.Status.PENDING_REVIEW
            salon.rejection_reason = None
            salon.reviewed_by = None
            salon.reviewed_at = None

    salon.save()
    logger.info("salon updated", extra={"salon_id": str(salon.id), "status": salon.status})
    return salon


@transaction.atomic
def delete_salon(salon: Salon, user, *, is_admin: bool) -> None:
    _ensure_owner(salon, user, is_admin=is_admin)
    salon_id = str(salon.pk)
    salon.delete()
    logger.info("salon deleted", extra={"salon_id": salon_id})


@transaction.atomic
def bulk_delete_salons(salon_ids) -> int:
    qs = Salon.objects.filter(pk__in=list(salon_ids))
    count = qs.count()
    qs.delete()
    logger.info("salons bulk deleted", extra={"count": count})
    return count
