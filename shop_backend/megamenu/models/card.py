"""
PATH: megamenu/models/card.py

MEGA MENU PROMO CARD

Each menu (SHOP, ABOUT) has two card slots. A slot is identified by
(menu_type, position); writing to a filled slot replaces its card.

image_url is what the storefront renders: either the stored upload's URL or
an external / previously uploaded URL supplied by the admin.
"""

import time
import uuid

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from gallery.models import sanitize_filename

MIN_POSITION = 1
MAX_POSITION = 2


def megamenu_upload_to(instance, filename: str) -> str:
    subdir = getattr(settings, "MEGAMENU_UPLOAD_SUBDIR", "mega-menu")
    return f"{subdir}/{int(time.time() * 1000)}_{sanitize_filename(filename)}"


class MegaMenuCard(models.Model):
    class MenuType(models.TextChoices):
        SHOP = "SHOP", "Shop"
        ABOUT = "ABOUT", "About"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    menu_type = models.CharField(max_length=10, choices=MenuType.choices)
    position = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(MIN_POSITION), MaxValueValidator(MAX_POSITION)]
    )

    image = models.FileField(upload_to=megamenu_upload_to, max_length=500, blank=True)
    image_url = models.CharField(max_length=1000)
    link_url = models.CharField(max_length=1000)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["menu_type", "position"]
        constraints = [
            models.UniqueConstraint(fields=["menu_type", "position"], name="megamenu_type_pos_uniq"),
        ]

    def __str__(self):
        return f"{self.menu_type} #{self.position}"
