# salons/tests/test_api.py

"""
SALON API TESTS

Run with:
    python manage.py test salons -v 2
"""

import json

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from audit.models import AdminLog
from salons.models import Salon

User = get_user_model()


class SalonDirectoryApiTests(TestCase):
    """
    GUARANTEES:
    - Anonymous visitors see active + approved salons only
    - BIO Diamond salons come first, then city, then name
    - Staff see every salon with the owner summary
    """

    def setUp(self):
        self.client = APIClient()
        self.owner = User.objects.create_user(email="owner@example.com", password="pass1234", name="Olga")
        self.admin = User.objects.create_user(email="admin@example.com", password="pass1234", role="admin")

        approved = Salon.Status.APPROVED
        self.linz = Salon.objects.create(name="Zeta", address="1 A St", city="Linz", status=approved)
        self.graz = Salon.objects.create(name="Alpha", address="2 B St", city="Graz", status=approved)
        self.diamond = Salon.objects.create(
            name="Shine", address="3 C St", city="Wien", status=approved, is_bio_diamond=True
        )
        self.hidden = Salon.objects.create(
            name="Pending", address="4 D St", city="Graz", user=self.owner
        )
        self.inactive = Salon.objects.create(
            name="Closed", address="5 E St", city="Graz", status=approved, is_active=False
        )

    def test_public_list(self):
        res = self.client.get("/api/salons/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual([s["name"] for s in res.data], ["Shine", "Alpha", "Zeta"])
        self.assertNotIn("user", res.data[0])

    def test_search_and_city(self):
        res = self.client.get("/api/salons/", {"search": "b st"})
        self.assertEqual([s["name"] for s in res.data], ["Alpha"])

        res = self.client.get("/api/salons/", {"city": "LIN"})
        self.assertEqual([s["name"] for s in res.data], ["Zeta"])

    def test_staff_list_includes_everything(self):
        self.client.force_authenticate(self.admin)
        res = self.client.get("/api/salons/")
        self.assertEqual(len(res.data), 5)

        pending = next(s for s in res.data if s["name"] == "Pending")
        self.assertEqual(pending["user"]["email"], "owner@example.com")

    def test_hidden_salon_detail(self):
        res = self.client.get(f"/api/salons/{self.hidden.id}/")
        self.assertEqual(res.status_code, 404)

        self.client.force_authenticate(self.owner)
        res = self.client.get(f"/api/salons/{self.hidden.id}/")
        self.assertEqual(res.status_code, 200)


class SalonOwnerApiTests(TestCase):
    """
    GUARANTEES:
    - Creating a listing needs an account; one listing per account
    - Owners edit/delete only their own listing (403 otherwise)
    - my-salon returns the caller's listing or 404
    """

    def setUp(self):
        self.client = APIClient()
        self.owner = User.objects.create_user(email="owner@example.com", password="pass1234")
        self.other = User.objects.create_user(email="other@example.com", password="pass1234")

    def test_anonymous_cannot_create(self):
        res = self.client.post("/api/salons/", {"name": "X", "address": "Y", "city": "Z"}, format="json")
        self.assertEqual(res.status_code, 401)

    def test_required_fields(self):
        self.client.force_authenticate(self.owner)
        res = self.client.post("/api/salons/", {"name": "Polished", "city": " "}, format="json")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["detail"], "Name, address, and city are required fields")

    def test_create_and_my_salon(self):
        self.client.force_authenticate(self.owner)

        res = self.client.get("/api/salons/my-salon/")
        self.assertEqual(res.status_code, 404)

        res = self.client.post(
            "/api/salons/",
            {
                "name": "Polished",
                "address": "1 Main St",
                "city": "Vienna",
                "latitude": "48.2",
                "longitude": "",
                "workingHours": '{"monday": "9-17"}',
                "images": ["a.jpg", ""],
            },
            format="json",
        )
        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(res.data["status"], "PENDING_REVIEW")
        self.assertEqual(res.data["email"], "owner@example.com")
        self.assertEqual(res.data["latitude"], 48.2)
        self.assertIsNone(res.data["longitude"])
        self.assertEqual(res.data["workingHours"], {"monday": "9-17"})
        self.assertEqual(res.data["images"], ["a.jpg"])

        res = self.client.get("/api/salons/my-salon/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["name"], "Polished")

        res = self.client.post(
            "/api/salons/", {"name": "Again", "address": "2", "city": "Graz"}, format="json"
        )
        self.assertEqual(res.status_code, 400)
        self.assertIn("already have a salon", res.data["detail"])

    def test_edit_and_delete_only_own(self):
        salon = Salon.objects.create(name="Polished", address="1 Main St", city="Vienna", user=self.owner)

        self.client.force_authenticate(self.other)
        res = self.client.patch(f"/api/salons/{salon.id}/", {"name": "Stolen"}, format="json")
        self.assertEqual(res.status_code, 403)
        res = self.client.delete(f"/api/salons/{salon.id}/")
        self.assertEqual(res.status_code, 403)

        self.client.force_authenticate(self.owner)
        res = self.client.patch(f"/api/salons/{salon.id}/", {"name": "Polished Too"}, format="json")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["name"], "Polished Too")

        res = self.client.delete(f"/api/salons/{salon.id}/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["message"], "Salon deleted successfully")

    def test_customer_cannot_review(self):
        salon = Salon.objects.create(name="Polished", address="1 Main St", city="Vienna", user=self.owner)
        self.client.force_authenticate(self.owner)
        res = self.client.post(f"/api/salons/{salon.id}/review/", {"action": "approve"}, format="json")
        self.assertEqual(res.status_code, 403)


class SalonStaffApiTests(TestCase):
    """
    GUARANTEES:
    - Review validates action / reason and answers {success, salon, message}
    - Bulk update and delete answer {message, count}
    - Staff mutations are audit-logged
    """

    def setUp(self):
        self.client = APIClient()
        self.owner = User.objects.create_user(email="owner@example.com", password="pass1234")
        self.admin = User.objects.create_user(email="admin@example.com", password="pass1234", role="admin")
        self.client.force_authenticate(self.admin)

        self.salon = Salon.objects.create(
            name="Polished", address="1 Main St", city="Vienna", user=self.owner
        )

    def test_review_validation(self):
        url = f"/api/salons/{self.salon.id}/review/"

        res = self.client.post(url, {"action": "publish"}, format="json")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["detail"], "Invalid action. Must be 'approve' or 'reject'")

        res = self.client.post(url, {"action": "reject"}, format="json")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["detail"], "Rejection reason is required when rejecting a salon")

    def test_review_approve(self):
        res = self.client.post(f"/api/salons/{self.salon.id}/review/", {"action": "approve"}, format="json")
        self.assertEqual(res.status_code, 200)
        self.assertTrue(res.data["success"])
        self.assertEqual(res.data["salon"]["status"], "APPROVED")
        self.assertEqual(res.data["salon"]["reviewedBy"], str(self.admin.id))
        self.assertTrue(AdminLog.objects.filter(action_type="APPROVE", resource_type="Salon").exists())

    def test_staff_create_is_approved(self):
        res = self.client.post(
            "/api/salons/", {"name": "Walk-in", "address": "2 Side St", "city": "Graz"}, format="json"
        )
        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["status"], "APPROVED")
        self.assertIsNone(res.data["userId"])

    def test_bulk_update(self):
        res = self.client.patch(
            "/api/salons/bulk/",
            {"salonIds": [str(self.salon.id)], "action": "reject", "rejectionReason": "Duplicate"},
            format="json",
        )
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data, {"message": "Salons updated successfully", "count": 1})
        self.salon.refresh_from_db()
        self.assertEqual(self.salon.status, Salon.Status.REJECTED)

        res = self.client.patch(
            "/api/salons/bulk/",
            {"salonIds": [str(self.salon.id)], "action": "reject"},
            format="json",
        )
        self.assertEqual(res.status_code, 400)

    def test_bulk_delete(self):
        res = self.client.delete("/api/salons/bulk/", {"salonIds": [str(self.salon.id)]}, format="json")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data, {"message": "Salons deleted successfully", "count": 1})
        self.assertFalse(Salon.objects.exists())

    def test_export(self):
        res = self.client.get("/api/salons/export/", {"format": "json"})
        self.assertEqual(res.status_code, 200)
        rows = json.loads(res.content)
        self.assertEqual(rows[0]["ownerEmail"], "owner@example.com")
