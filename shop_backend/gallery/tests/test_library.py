# gallery/tests/test_library.py

"""
GALLERY LIBRARY SERVICE TESTS

Run with:
    python manage.py test gallery -v 2
"""

import shutil
import tempfile
from unittest.mock import patch

from django.core.files.storage import default_storage
from django.core.files.uploadedfile import SimpleUploadedFile
from django.db import DatabaseError
from django.test import TestCase, override_settings

from gallery.models import GalleryItem, gallery_upload_to, sanitize_filename
from gallery.services import library
from gallery.services.exceptions import (
    DuplicateNameError,
    FolderNotEmptyError,
    GalleryItemNotFound,
    InvalidMoveError,
    UploadTooLargeError,
)

MEDIA_ROOT = tempfile.mkdtemp()


def _upload(name="photo.jpg", content=b"jpegbytes", content_type="image/jpeg"):
    return SimpleUploadedFile(name, content, content_type=content_type)


class FilenameTests(TestCase):
    """
    GUARANTEES:
    - unsafe characters become underscores, directories are stripped
    - stored names carry a timestamp prefix under the gallery folder
    """

    def test_sanitize(self):
        self.assertEqual(sanitize_filename("my photo (1).jpg"), "my_photo__1_.jpg")
        self.assertEqual(sanitize_filename("../../etc/passwd"), "passwd")
        self.assertEqual(sanitize_filename(""), "file")

    @override_settings(GALLERY_UPLOAD_SUBDIR="gallery")
    def test_upload_to(self):
        path = gallery_upload_to(None, "a b.png")
        self.assertTrue(path.startswith("gallery/"))
        self.assertTrue(path.endswith("_a_b.png"))


@override_settings(MEDIA_ROOT=MEDIA_ROOT)
class GalleryLibraryTests(TestCase):
    """
    GUARANTEES:
    - folder names are unique per parent
    - uploads are stored and removed with their rows
    - folders never move into themselves or their descendants
    - non-empty folders are never deleted; bulk delete reports skips
    """

    @classmethod
    def tearDownClass(cls):
        super().tearDownClass()
        shutil.rmtree(MEDIA_ROOT, ignore_errors=True)

    def test_create_folder_and_duplicate(self):
        folder = library.create_folder("Campaigns")
        self.assertTrue(folder.is_folder)
        self.assertIsNone(folder.folder)

        with self.assertRaises(DuplicateNameError):
            library.create_folder("Campaigns")

        # same name is fine one level down
        child = library.create_folder("Campaigns", folder_id=folder.id)
        self.assertEqual(child.folder, folder)

    def test_create_folder_under_missing_parent(self):
        with self.assertRaises(GalleryItemNotFound):
            library.create_folder("X", folder_id="6f1c2f8e-5a9e-4f57-9a3b-0c0d2b0c1a11")

    def test_upload_and_delete_file(self):
        folder = library.create_folder("Shots")
        [item] = library.upload_files([_upload("nail art.jpg")], folder_id=folder.id)

        self.assertEqual(item.name, "nail art.jpg")
        self.assertEqual(item.mime_type, "image/jpeg")
        self.assertEqual(item.size, len(b"jpegbytes"))
        self.assertIn("nail_art.jpg", item.file.name)
        self.assertTrue(item.url)
        self.assertTrue(default_storage.exists(item.file.name))

        stored = item.file.name
        library.delete_item(item)
        self.assertFalse(GalleryItem.objects.filter(pk=item.pk).exists())
        self.assertFalse(default_storage.exists(stored))

    @override_settings(GALLERY_MAX_UPLOAD_MB=0)
    def test_upload_too_large(self):
        with self.assertRaises(UploadTooLargeError):
            library.upload_files([_upload()])
        self.assertFalse(GalleryItem.objects.exists())

    def test_upload_into_file_rejected(self):
        [item] = library.upload_files([_upload()])
        with self.assertRaises(InvalidMoveError):
            library.upload_files([_upload()], folder_id=item.id)

    def test_move_rules(self):
        root = library.create_folder("Root")
        child = library.create_folder("Child", folder_id=root.id)
        grandchild = library.create_folder("Grandchild", folder_id=child.id)

        with self.assertRaises(InvalidMoveError):
            library.move_item(root, root.id)
        with self.assertRaises(InvalidMoveError):
            library.move_item(root, grandchild.id)

        moved = library.move_item(grandchild, None)
        self.assertIsNone(moved.folder)

        library.create_folder("Child", folder_id=None)
        with self.assertRaises(DuplicateNameError):
            library.move_item(child, None)

    def test_breadcrumb(self):
        root = library.create_folder("Root")
        child = library.create_folder("Child", folder_id=root.id)
        self.assertEqual(
            [p["name"] for p in library.breadcrumb(child)],
            ["Root", "Child"],
        )

    def test_delete_non_empty_folder(self):
        folder = library.create_folder("Full")
        library.create_folder("Inner", folder_id=folder.id)
        with self.assertRaises(FolderNotEmptyError):
            library.delete_item(folder)

    def test_bulk_delete(self):
        outer = library.create_folder("Outer")
        inner = library.create_folder("Inner", folder_id=outer.id)
        [photo] = library.upload_files([_upload()], folder_id=inner.id)
        keeper = library.create_folder("Keeper")
        library.create_folder("Kept child", folder_id=keeper.id)
        missing = "6f1c2f8e-5a9e-4f57-9a3b-0c0d2b0c1a11"

        result = library.bulk_delete([outer.id, inner.id, photo.id, keeper.id, missing])

        self.assertCountEqual(result.deleted, [str(outer.id), str(inner.id), str(photo.id)])
        self.assertEqual(
            result.skipped,
            [
                {"id": str(keeper.id), "reason": "Cannot delete folder with items. Please empty it first."},
                {"id": missing, "reason": "Item not found"},
            ],
        )

    def test_browse(self):
        folder = library.create_folder("Folder")
        library.upload_files([_upload("b.jpg")])
        library.upload_files([_upload("a.jpg")], folder_id=folder.id)

        admin_root = list(library.browse(is_admin=True))
        self.assertEqual(len(admin_root), 2)
        folder_row = next(i for i in admin_root if i.is_folder)
        self.assertEqual(folder_row.child_count, 1)

        flat = [i.name for i in library.browse(is_admin=False)]
        self.assertEqual(flat, ["a.jpg", "b.jpg"])

        searched = [i.name for i in library.browse(is_admin=False, search="B.J")]
        self.assertEqual(searched, ["b.jpg"])

    def test_bulk_delete_reports_ids_of_deleted_rows(self):
        [photo] = library.upload_files([_upload()])
        photo_id = str(photo.id)

        result = library.bulk_delete([photo_id])

        self.assertEqual(result.deleted, [photo_id])
        self.assertNotIn("None", result.deleted)

    def test_multi_upload_is_all_or_nothing(self):
        original_save = GalleryItem.save
        calls = {"n": 0}

        def failing_second_save(item, *args, **kwargs):
            calls["n"] += 1
            if calls["n"] == 2:
                raise DatabaseError("insert failed")
            return original_save(item, *args, **kwargs)

        with patch.object(GalleryItem, "save", failing_second_save):
            with self.assertRaises(DatabaseError):
                library.upload_files([_upload("rollback-one.jpg"), _upload("rollback-two.jpg")])

        self.assertFalse(GalleryItem.objects.filter(type=GalleryItem.Type.FILE).exists())
        _, stored = default_storage.listdir("gallery")
        self.assertEqual([name for name in stored if "rollback" in name], [])

    def test_delete_survives_storage_failure(self):
        [photo] = library.upload_files([_upload()])

        with patch(
            "django.core.files.storage.FileSystemStorage.delete", side_effect=OSError("disk gone")
        ), self.assertLogs("gallery", level="ERROR"):
            library.delete_item(photo)

        self.assertFalse(GalleryItem.objects.exists())
