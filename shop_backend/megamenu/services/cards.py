# megamenu/services/cards.py

"""
======================================================
PATH: megamenu/services/cards.py
======================================================
MEGA MENU CARD SERVICES

Reads:
- list_cards() serves the storefront; results are cached per
  (menuType, includeInactive) for MEGAMENU_CACHE_SECONDS.

Writes:
- upsert_card() fills a (menu_type, position) slot, replacing any card there.
- update_card() / delete_card() edit or drop a card by id.
- Every write drops all cached card lists.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from django.conf import settings
from django.core.cache import cache
from django.db import transaction

from megamenu.models import MAX_POSITION, MIN_POSITION, MegaMenuCard

from .exceptions import InvalidCardError

logger = logging.getLogger("megamenu")

CACHE_PREFIX = "megamenu:cards"
_MENU_KEYS = ("ALL", *MegaMenuCard.MenuType.values)


def cache_key(menu_type: Optional[str], include_inactive: bool) -> str:
    return f"{CACHE_PREFIX}:{menu_type or 'ALL'}:{int(bool(include_inactive))}"


def invalidate_cache() -> None:
    keys = [cache_key(m if m != "ALL" else None, flag) for m in _MENU_KEYS for flag in (False, True)]
    cache.delete_many(keys)
    logger.debug("mega menu cache cleared", extra={"keys": len(keys)})


def clean_menu_type(value) -> str:
    menu_type = str(value or "").strip().upper()
    if menu_type not in MegaMenuCard.MenuType.values:
        raise InvalidCardError("menuType must be SHOP or ABOUT")
    return menu_type


def clean_position(value) -> int:
    try:
        position = int(str(value).strip())
    except (TypeError, ValueError):
        raise InvalidCardError("position must be 1 or 2")
    if not MIN_POSITION <= position <= MAX_POSITION:
        raise InvalidCardError("position must be 1 or 2")
    return position


def card_as_dict(card: MegaMenuCard) -> dict[str, Any]:
    return {
        "id": str(card.id),
        "menuType": card.menu_type,
        "position": card.position,
        "imageUrl": card.image_url,
        "linkUrl": card.link_url,
        "isActive": card.is_active,
        "createdAt": card.created_at.isoformat() if card.created_at else None,
        "updatedAt": card.updated_at.isoformat() if card.updated_at else None,
    }


# -----------------------------
# Reads
# -----------------------------
def list_cards(*, menu_type: Optional[str] = None, include_inactive: bool = False) -> list[dict]:
    if menu_type:
        menu_type = clean_menu_type(menu_type)

    key = cache_key(menu_type, include_inactive)
    cached = cache.get(key)
    if cached is not None:
        return cached

    qs = MegaMenuCard.objects.all()
    if menu_type:
        qs = qs.filter(menu_type=menu_type)
    if not include_inactive:
        qs = qs.filter(is_active=True)

    cards = [card_as_dict(c) for c in qs.order_by("menu_type", "position")]
    cache.set(key, cards, getattr(settings, "MEGAMENU_CACHE_SECONDS", 300))
    return cards


# -----------------------------
# Writes
# -----------------------------
def _drop_stored_image(name: str, storage) -> None:
    # the row is already gone or repointed; a storage failure only leaves an orphan
    if not name:
        return
    try:
        storage.delete(name)
    except OSError:
        logger.exception("mega menu image delete failed", extra={"stored_as": name})


def upsert_card(
    *,
    menu_type,
    position,
    link_url: str,
    is_active: bool,
    upload=None,
    existing_image_url: str = "",
) -> tuple[MegaMenuCard, bool]:
    """
    Returns (card, created).
    """
    menu_type = clean_menu_type(menu_type)
    position = clean_position(position)
    link_url = (link_url or "").strip()
    existing_image_url = (existing_image_url or "").strip()

    if upload is None and not existing_image_url:
        raise InvalidCardError("Image is required")

    with transaction.atomic():
        card = (
            MegaMenuCard.objects.select_for_update()
            .filter(menu_type=menu_type, position=position)
            .first()
        )
        created = card is None
        if created:
            card = MegaMenuCard(menu_type=menu_type, position=position)

        previous_image = card.image.name if card.image else ""
        card.link_url = link_url
        card.is_active = is_active

        if upload is not None:
            card.image.save(upload.name, upload, save=False)
            card.image_url = card.image.url
        elif existing_image_url != card.image_url:
            card.image = ""
            card.image_url = existing_image_url

        card.save()

    if previous_image and previous_image != (card.image.name if card.image else ""):
        _drop_stored_image(previous_image, card.image.storage)

    invalidate_cache()
    logger.info(
        "mega menu card saved",
        extra={"card_id": str(card.id), "menu_type": menu_type, "position": position, "was_created": created},
    )
    return card, created


def update_card(card: MegaMenuCard, changes: dict[str, Any]) -> MegaMenuCard:
    """
    changes uses model field names: image_url, link_url, is_active.
    """
    previous_image = card.image.name if card.image else ""

    if "image_url" in changes and changes["image_url"] != card.image_url:
        card.image_url = changes["image_url"]
        card.image = ""
    else:
        previous_image = ""
    if "link_url" in changes:
        card.link_url = changes["link_url"]
    if "is_active" in changes:
        card.is_active = changes["is_active"]

    card.save()
    if previous_image:
        _drop_stored_image(previous_image, card.image.storage)

    invalidate_cache()
    logger.info("mega menu card updated", extra={"card_id": str(card.id)})
    return card


def delete_card(card: MegaMenuCard) -> None:
    card_id = str(card.pk)
    stored = card.image.name if card.image else ""

    card.delete()
    _drop_stored_image(stored, card.image.storage)

    invalidate_cache()
    logger.info("mega menu card deleted", extra={"card_id": card_id})
