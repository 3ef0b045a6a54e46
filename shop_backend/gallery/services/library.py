# gallery/services/library.py

"""
======================================================
PATH: gallery/services/library.py
======================================================
GALLERY LIBRARY SERVICES

Purpose:
- Browse folders (admins) or every file flat (everyone else).
- Create folders, store uploads, rename, move and delete items.

Rules:
- Names are unique per (parent folder, type) for folders; files are checked
  on rename / move only, uploads keep their original display name.
- Folders move only into other folders, never into themselves or their
  descendants.
- Non-empty folders are never deleted; deleting a file removes the stored
  object too.
"""

from __future__ import annotations

import logging
import mimetypes
from dataclasses import dataclass, field
from typing import Iterable, Optional

from django.conf import settings
from django.core.files.storage import default_storage
from django.db import DatabaseError, transaction
from django.db.models import Count

from gallery.models import GalleryItem

from .exceptions import (
    DuplicateNameError,
    FolderNotEmptyError,
    GalleryItemNotFound,
    InvalidMoveError,
    UploadTooLargeError,
)

logger = logging.getLogger("gallery")

GALLERY_SORTS = {
    "name": ("name",),
    "date": ("-created_at",),
    "size": ("-size", "name"),
    "type": ("type", "name"),
}
DEFAULT_SORT = "name"


# -----------------------------
# Browsing
# -----------------------------
def with_child_count(qs):
    return qs.annotate(child_count=Count("items", distinct=True))


def browse(
    *,
    is_admin: bool,
    folder_id=None,
    item_type: Optional[str] = None,
    search: str = "",
    sort: str = DEFAULT_SORT,
):
    """
    Admins browse one folder at a time (root when folder_id is empty);
    everyone else gets every file in the library, ignoring folders.
    """
    qs = GalleryItem.objects.all()

    if is_admin:
        qs = qs.filter(folder_id=folder_id or None)
        if item_type in GalleryItem.Type.values:
            qs = qs.filter(type=item_type)
    else:
        qs = qs.filter(type=GalleryItem.Type.FILE)

    search = (search or "").strip()
    if search:
        qs = qs.filter(name__icontains=search)

    return with_child_count(qs).order_by(*GALLERY_SORTS.get(sort, GALLERY_SORTS[DEFAULT_SORT]))


def breadcrumb(item: GalleryItem) -> list[dict]:
    """
    [{id, name}, ...] from the root down to the item itself.
    """
    path = []
    seen = set()
    node = item
    while node is not None and node.pk not in seen:
        seen.add(node.pk)
        path.append({"id": str(node.pk), "name": node.name})
        node = node.folder
    return list(reversed(path))


def children_of(item: GalleryItem):
    return with_child_count(item.items.all()).order_by("type", "name")


# -----------------------------
# Helpers
# -----------------------------
def resolve_folder(folder_id) -> Optional[GalleryItem]:
    if folder_id in (None, ""):
        return None
    folder = GalleryItem.objects.filter(pk=folder_id).first()
    if folder is None:
        raise GalleryItemNotFound("Folder not found")
    if not folder.is_folder:
        raise InvalidMoveError("Target must be a folder")
    return folder


def _ensure_name_free(name: str, *, parent: Optional[GalleryItem], item_type: str, exclude_pk=None) -> None:
    qs = GalleryItem.objects.filter(name=name, type=item_type, folder=parent)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    if qs.exists():
        noun = "folder" if item_type == GalleryItem.Type.FOLDER else "file"
        raise DuplicateNameError(f"A {noun} with this name already exists")


def _is_descendant(candidate: GalleryItem, ancestor: GalleryItem) -> bool:
    node = candidate
    seen = set()
    while node is not None and node.pk not in seen:
        if node.pk == ancestor.pk:
            return True
        seen.add(node.pk)
        node = node.folder
    return False


def max_upload_bytes() -> int:
    return int(getattr(settings, "GALLERY_MAX_UPLOAD_MB", 25)) * 1024 * 1024


# -----------------------------
# Mutations
# -----------------------------
@transaction.atomic
def create_folder(name: str, *, folder_id=None, description: Optional[str] = None) -> GalleryItem:
    name = (name or "").strip()
    parent = resolve_folder(folder_id)
    _ensure_name_free(name, parent=parent, item_type=GalleryItem.Type.FOLDER)

    folder = GalleryItem.objects.create(
        type=GalleryItem.Type.FOLDER,
        name=name,
        folder=parent,
        description=(description or "").strip() or None,
    )
    logger.info("gallery folder created", extra={"item_id": str(folder.id)})
    return folder


def _drop_stored_file(name: str, storage) -> None:
    # rows are already committed or rolled back; a failed delete leaves an orphan
    try:
        storage.delete(name)
    except OSError:
        logger.exception("gallery file delete failed", extra={"stored_as": name})


def upload_files(files: Iterable, *, folder_id=None, description: Optional[str] = None) -> list[GalleryItem]:
    """
    Store each upload and create its FILE row. Size is checked for every file
    before anything is written; the rows are created all or nothing, and stored
    objects are removed again if any row fails.
    """
    files = list(files)
    parent = resolve_folder(folder_id)
    limit = max_upload_bytes()

    for upload in files:
        if upload.size > limit:
            raise UploadTooLargeError(
                f'File "{upload.name}" exceeds the {settings.GALLERY_MAX_UPLOAD_MB} MB upload limit'
            )

    created: list[GalleryItem] = []
    stored: list[str] = []
    try:
        with transaction.atomic():
            for upload in files:
                mime_type = (
                    getattr(upload, "content_type", None)
                    or mimetypes.guess_type(upload.name)[0]
                    or "application/octet-stream"
                )
                item = GalleryItem(
                    type=GalleryItem.Type.FILE,
                    name=upload.name,
                    folder=parent,
                    description=(description or "").strip() or None,
                    mime_type=mime_type,
                    size=upload.size,
                )
                item.file.save(upload.name, upload, save=False)
                stored.append(item.file.name)
                item.url = item.file.url
                item.save()
                created.append(item)
    except DatabaseError:
        for name in stored:
            _drop_stored_file(name, default_storage)
        raise

    for item in created:
        logger.info(
            "gallery file uploaded",
            extra={"item_id": str(item.id), "size": item.size, "stored_as": item.file.name},
        )
    return created


@transaction.atomic
def update_item(item: GalleryItem, *, name: Optional[str] = None, description=None, set_description=False):
    if name is not None and name.strip():
        name = name.strip()
        _ensure_name_free(name, parent=item.folder, item_type=item.type, exclude_pk=item.pk)
        item.name = name
    if set_description:
        item.description = (description or "").strip() or None
    item.save()
    return item


@transaction.atomic
def move_item(item: GalleryItem, target_folder_id) -> GalleryItem:
    target = resolve_folder(target_folder_id)

    if target is not None and item.is_folder and _is_descendant(target, item):
        raise InvalidMoveError("Cannot move a folder into itself or one of its subfolders")

    _ensure_name_free(item.name, parent=target, item_type=item.type, exclude_pk=item.pk)

    item.folder = target
    item.save(update_fields=["folder", "updated_at"])
    logger.info(
        "gallery item moved",
        extra={"item_id": str(item.id), "folder_id": str(target.pk) if target else None},
    )
    return item


def delete_item(item: GalleryItem) -> None:
    if item.is_folder and item.items.exists():
        raise FolderNotEmptyError("Cannot delete folder with items. Please empty it first.")

    item_id = str(item.pk)
    stored = item.file.name if item.file else ""

    with transaction.atomic():
        item.delete()

    if stored:
        _drop_stored_file(stored, item.file.storage)
    logger.info("gallery item deleted", extra={"item_id": item_id, "stored_as": stored})


@dataclass
class BulkDeleteResult:
    deleted: list[str] = field(default_factory=list)
    skipped: list[dict] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {"deleted": self.deleted, "skipped": self.skipped}


def bulk_delete(ids: Iterable) -> BulkDeleteResult:
    """
    Delete what can be deleted; non-empty folders and unknown ids are skipped.
    Files go before folders so a folder emptied by the same request can go too.
    """
    wanted = [str(i) for i in ids]
    items = {str(i.pk): i for i in GalleryItem.objects.filter(pk__in=wanted)}
    result = BulkDeleteResult()

    ordered = sorted(items.values(), key=lambda i: (i.is_folder, -len(breadcrumb(i))))
    for item in ordered:
        item_id = str(item.pk)
        try:
            delete_item(item)
        except FolderNotEmptyError as exc:
            result.skipped.append({"id": item_id, "reason": str(exc)})
        else:
            result.deleted.append(item_id)

    for missing in (i for i in wanted if i not in items):
        result.skipped.append({"id": missing, "reason": "Item not found"})

    return result
