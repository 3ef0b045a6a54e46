"""
PATH: gallery/models/item.py

GALLERY ITEM (FOLDER OR FILE)

- Folders nest through `folder` (NULL = library root).
- Files live in default storage under GALLERY_UPLOAD_SUBDIR with a
  millisecond timestamp prefix, so two uploads never collide.
- A folder that still holds items cannot be deleted (PROTECT).
"""

from __future__ import annotations

import re
import time
import uuid

from django.conf import settings
from django.db import models

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


def sanitize_filename(name: str) -> str:
    base = (name or "").replace("\\", "/").rsplit("/", 1)[-1]
    return _UNSAFE_CHARS.sub("_", base) or "file"


def gallery_upload_to(instance, filename: str) -> str:
    subdir = getattr(settings, "GALLERY_UPLOAD_SUBDIR", "gallery")
    return f"{subdir}/{int(time.time() * 1000)}_{sanitize_filename(filename)}"


class GalleryItem(models.Model):
    class Type(models.TextChoices):
        FOLDER = "FOLDER", "Folder"
        FILE = "FILE", "File"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    type = models.CharField(max_length=10, choices=Type.choices)
    name = models.CharField(max_length=255)
    description = models.TextField(null=True, blank=True)

    folder = models.ForeignKey(
        "self",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="items",
        limit_choices_to={"type": "FOLDER"},
    )

    file = models.FileField(upload_to=gallery_upload_to, max_length=500, blank=True)
    url = models.CharField(max_length=1000, blank=True)
    mime_type = models.CharField(max_length=255, blank=True)
    size = models.PositiveBigIntegerField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["type", "name"]
        indexes = [
            models.Index(fields=["folder", "type"], name="gallery_folder_type_idx"),
            models.Index(fields=["name"], name="gallery_name_idx"),
        ]

    @property
    def is_folder(self) -> bool:
        return self.type == self.Type.FOLDER

    def __str__(self):
        return self.name
