# megamenu/tests/test_api.py

"""
MEGA MENU CARD API TESTS

Run with:
    python manage.py test megamenu -v 2
"""

import shutil
import tempfile
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.core.files.storage import default_storage
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from megamenu.models import MegaMenuCard
from megamenu.services import cards as card_service

User = get_user_model()

MEDIA_ROOT = tempfile.mkdtemp()


def _image(name="promo.png"):
    return SimpleUploadedFile(name, b"pngbytes", content_type="image/png")


@override_settings(MEDIA_ROOT=MEDIA_ROOT)
class MegaMenuCardApiTests(TestCase):
    """
    GUARANTEES:
    - the storefront sees active cards ordered by menu and position
    - POST fills a slot, replacing the card already there
    - slot values and images are validated with readable messages
    - reads are cached and every write clears the cache
    """

    @classmethod
    def tearDownClass(cls):
        super().tearDownClass()
        shutil.rmtree(MEDIA_ROOT, ignore_errors=True)

    def setUp(self):
        cache.clear()
        self.client = APIClient()
        self.admin = User.objects.create_user(email="admin@example.com", password="pass1234", role="admin")

        self.shop_2 = MegaMenuCard.objects.create(
            menu_type="SHOP", position=2, image_url="/img/s2.png", link_url="/shop/2"
        )
        self.shop_1 = MegaMenuCard.objects.create(
            menu_type="SHOP", position=1, image_url="/img/s1.png", link_url="/shop/1"
        )
        self.about_1 = MegaMenuCard.objects.create(
            menu_type="ABOUT", position=1, image_url="/img/a1.png", link_url="/about", is_active=False
        )

    # -----------------------------
    # Reads
    # -----------------------------
    def test_public_list(self):
        res = self.client.get("/api/mega-menu-cards/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(
            [(c["menuType"], c["position"]) for c in res.data["cards"]],
            [("SHOP", 1), ("SHOP", 2)],
        )

    def test_menu_type_filter(self):
        res = self.client.get("/api/mega-menu-cards/", {"menuType": "ABOUT"})
        self.assertEqual(res.data["cards"], [])

        res = self.client.get("/api/mega-menu-cards/", {"menuType": "PROMO"})
        self.assertEqual(res.status_code, 400)

    def test_include_inactive_for_editors_only(self):
        res = self.client.get("/api/mega-menu-cards/", {"includeInactive": "true"})
        self.assertEqual(len(res.data["cards"]), 2)

        self.client.force_authenticate(self.admin)
        res = self.client.get("/api/mega-menu-cards/", {"includeInactive": "true"})
        self.assertEqual(len(res.data["cards"]), 3)

    def test_reads_are_cached_until_a_write(self):
        self.client.get("/api/mega-menu-cards/")

        # bypassing the service leaves the cached list in place
        MegaMenuCard.objects.filter(pk=self.shop_2.pk).update(is_active=False)
        res = self.client.get("/api/mega-menu-cards/")
        self.assertEqual(len(res.data["cards"]), 2)

        card_service.update_card(self.shop_1, {"link_url": "/new"})
        res = self.client.get("/api/mega-menu-cards/")
        self.assertEqual([c["linkUrl"] for c in res.data["cards"]], ["/new"])

    # -----------------------------
    # Upsert
    # -----------------------------
    def test_create_with_upload(self):
        self.client.force_authenticate(self.admin)
        res = self.client.post(
            "/api/mega-menu-cards/",
            {"menuType": "ABOUT", "position": "2", "linkUrl": "/team", "isActive": "true", "file": _image()},
            format="multipart",
        )
        self.assertEqual(res.status_code, 201, res.data)
        card = MegaMenuCard.objects.get(menu_type="ABOUT", position=2)
        self.assertTrue(card.is_active)
        self.assertTrue(default_storage.exists(card.image.name))
        self.assertEqual(res.data["card"]["imageUrl"], card.image.url)

    def test_upsert_replaces_slot(self):
        self.client.force_authenticate(self.admin)
        res = self.client.post(
            "/api/mega-menu-cards/",
            {"menuType": "SHOP", "position": "1", "linkUrl": "/sale", "existingImageUrl": "/img/sale.png"},
            format="multipart",
        )
        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(res.data["card"]["id"], str(self.shop_1.id))
        self.assertEqual(MegaMenuCard.objects.filter(menu_type="SHOP").count(), 2)

        self.shop_1.refresh_from_db()
        self.assertEqual(self.shop_1.link_url, "/sale")
        self.assertEqual(self.shop_1.image_url, "/img/sale.png")
        # isActive missing from the form means inactive
        self.assertFalse(self.shop_1.is_active)

    def test_upsert_validation(self):
        self.client.force_authenticate(self.admin)

        res = self.client.post("/api/mega-menu-cards/", {"menuType": "SHOP"}, format="multipart")
        self.assertEqual(res.data["detail"], "menuType, position, and linkUrl are required")

        res = self.client.post(
            "/api/mega-menu-cards/",
            {"menuType": "FOOTER", "position": "1", "linkUrl": "/x", "existingImageUrl": "/i.png"},
            format="multipart",
        )
        self.assertEqual(res.data["detail"], "menuType must be SHOP or ABOUT")

        res = self.client.post(
            "/api/mega-menu-cards/",
            {"menuType": "SHOP", "position": "3", "linkUrl": "/x", "existingImageUrl": "/i.png"},
            format="multipart",
        )
        self.assertEqual(res.data["detail"], "position must be 1 or 2")

        res = self.client.post(
            "/api/mega-menu-cards/",
            {"menuType": "SHOP", "position": "1", "linkUrl": "/x"},
            format="multipart",
        )
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["detail"], "Image is required")

    def test_writes_need_capability(self):
        res = self.client.post("/api/mega-menu-cards/", {}, format="multipart")
        self.assertEqual(res.status_code, 401)

        customer = User.objects.create_user(email="c@example.com", password="pass1234")
        self.client.force_authenticate(customer)
        res = self.client.delete(f"/api/mega-menu-cards/{self.shop_1.id}/")
        self.assertEqual(res.status_code, 403)

    # -----------------------------
    # Patch / delete
    # -----------------------------
    def test_patch(self):
        self.client.force_authenticate(self.admin)
        res = self.client.patch(
            f"/api/mega-menu-cards/{self.about_1.id}/", {"isActive": True}, format="json"
        )
        self.assertEqual(res.status_code, 200)
        self.assertTrue(res.data["card"]["isActive"])

    def test_delete(self):
        self.client.force_authenticate(self.admin)
        res = self.client.delete(f"/api/mega-menu-cards/{self.shop_2.id}/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data, {"success": True})

        res = self.client.delete(f"/api/mega-menu-cards/{self.shop_2.id}/")
        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.data["detail"], "Card not found")

    def test_delete_removes_uploaded_image(self):
        card, _ = card_service.upsert_card(
            menu_type="ABOUT", position=2, link_url="/x", is_active=True, upload=_image()
        )
        stored = card.image.name
        self.assertTrue(default_storage.exists(stored))

        card_service.delete_card(card)
        self.assertFalse(default_storage.exists(stored))

    def test_resubmitting_current_image_keeps_upload(self):
        self.client.force_authenticate(self.admin)
        res = self.client.post(
            "/api/mega-menu-cards/",
            {"menuType": "ABOUT", "position": "2", "linkUrl": "/team", "isActive": "true", "file": _image()},
            format="multipart",
        )
        self.assertEqual(res.status_code, 201, res.data)
        image_url = res.data["card"]["imageUrl"]
        stored = MegaMenuCard.objects.get(menu_type="ABOUT", position=2).image.name

        # the admin form sends the current url back when only the link changes
        res = self.client.post(
            "/api/mega-menu-cards/",
            {
                "menuType": "ABOUT",
                "position": "2",
                "linkUrl": "/our-team",
                "isActive": "true",
                "existingImageUrl": image_url,
            },
            format="multipart",
        )
        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(res.data["card"]["imageUrl"], image_url)
        self.assertEqual(res.data["card"]["linkUrl"], "/our-team")

        card = MegaMenuCard.objects.get(menu_type="ABOUT", position=2)
        self.assertEqual(card.image.name, stored)
        self.assertTrue(default_storage.exists(stored))

    def test_new_image_url_drops_old_upload(self):
        card, _ = card_service.upsert_card(
            menu_type="ABOUT", position=2, link_url="/x", is_active=True, upload=_image()
        )
        stored = card.image.name

        card, created = card_service.upsert_card(
            menu_type="ABOUT", position=2, link_url="/x", is_active=True, existing_image_url="/img/new.png"
        )
        self.assertFalse(created)
        self.assertEqual(card.image_url, "/img/new.png")
        self.assertFalse(card.image)
        self.assertFalse(default_storage.exists(stored))

    def test_delete_survives_storage_failure(self):
        card, _ = card_service.upsert_card(
            menu_type="ABOUT", position=2, link_url="/x", is_active=True, upload=_image()
        )

        with patch(
            "django.core.files.storage.FileSystemStorage.delete", side_effect=OSError("disk gone")
        ), self.assertLogs("megamenu", level="ERROR"):
            card_service.delete_card(card)

        self.assertFalse(MegaMenuCard.objects.filter(menu_type="ABOUT", position=2).exists())
