# users/tests/test_admin_users.py

"""
ADMIN USER MANAGEMENT + BANNED EMAIL TESTS

Run with:
    python manage.py test users -v 2
"""

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from audit.models import AdminLog
from users.models import BannedEmail

User = get_user_model()


class AdminUserApiTests(TestCase):
    """
    GUARANTEES:
    - only users.manage holders reach the user console
    - list filters by role / search and paginates on request
    - admins never delete themselves
    - every mutation is audit logged
    """

    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(
            email="admin@example.com", password="secret1", name="Boss", role="admin"
        )
        self.jane = User.objects.create_user(email="jane@example.com", password="secret1", name="Jane")
        self.bob = User.objects.create_user(email="bob@example.com", password="secret1", name="Bob")
        self.client.force_authenticate(self.admin)

    def test_customer_forbidden(self):
        self.client.force_authenticate(self.jane)
        res = self.client.get("/api/users/")
        self.assertEqual(res.status_code, 403)

    def test_list_filters(self):
        res = self.client.get("/api/users/", {"role": "customer"})
        self.assertEqual(res.status_code, 200)
        self.assertEqual({u["email"] for u in res.data}, {"jane@example.com", "bob@example.com"})

        res = self.client.get("/api/users/", {"search": "JAN"})
        self.assertEqual([u["email"] for u in res.data], ["jane@example.com"])

    def test_list_paginated(self):
        res = self.client.get("/api/users/", {"page": 2, "limit": 2})
        self.assertEqual(len(res.data["users"]), 1)
        self.assertEqual(res.data["pagination"]["total"], 3)
        self.assertEqual(res.data["pagination"]["totalPages"], 2)
        self.assertFalse(res.data["pagination"]["hasNextPage"])

    def test_create(self):
        res = self.client.post(
            "/api/users/",
            {"email": "Staff@Example.com", "password": "secret1", "role": "admin", "permissions": {"audit.view": "deny"}},
            format="json",
        )
        self.assertEqual(res.status_code, 201, res.data)
        staff = User.objects.get(email="staff@example.com")
        self.assertTrue(staff.is_staff)
        self.assertEqual(staff.permissions, {"audit.view": "deny"})
        self.assertTrue(AdminLog.objects.filter(resource_type="User", action_type="CREATE").exists())

        res = self.client.post(
            "/api/users/", {"email": "jane@example.com", "password": "secret1"}, format="json"
        )
        self.assertEqual(res.status_code, 400)

    def test_create_rejects_unknown_capability(self):
        res = self.client.post(
            "/api/users/",
            {"email": "x@example.com", "password": "secret1", "permissions": {"fly": "allow"}},
            format="json",
        )
        self.assertEqual(res.status_code, 400)
        self.assertIn("permissions", res.data)

    def test_update(self):
        res = self.client.patch(
            f"/api/users/{self.jane.id}/",
            {"role": "admin", "isActive": False, "name": "Janet"},
            format="json",
        )
        self.assertEqual(res.status_code, 200, res.data)
        self.assertEqual(res.data["role"], "admin")
        self.assertFalse(res.data["isActive"])

        log = AdminLog.objects.get(resource_type="User", action_type="UPDATE")
        self.assertIn("changes", log.details)

        res = self.client.patch(f"/api/users/{self.jane.id}/", {"email": "bob@example.com"}, format="json")
        self.assertEqual(res.status_code, 400)

    def test_delete(self):
        res = self.client.delete(f"/api/users/{self.admin.id}/")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["detail"], "You cannot delete your own account")

        res = self.client.delete(f"/api/users/{self.bob.id}/")
        self.assertEqual(res.status_code, 200)
        self.assertFalse(User.objects.filter(pk=self.bob.pk).exists())

    def test_export(self):
        res = self.client.get("/api/users/export/", {"format": "csv"})
        self.assertEqual(res.status_code, 200)
        lines = res.content.decode().splitlines()
        self.assertEqual(lines[0], '"ID","Name","Email","Role","User Type","Active","Last Login","Created At"')
        self.assertEqual(len(lines), 4)

        res = self.client.get("/api/users/export/", {"format": "pdf"})
        self.assertEqual(res.status_code, 400)


class BannedEmailApiTests(TestCase):
    """
    GUARANTEES:
    - bans are stored normalized and cannot be duplicated
    - unbanning a clean email is a 404
    - users.ban is required
    """

    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(email="admin@example.com", password="secret1", role="admin")
        self.client.force_authenticate(self.admin)

    def test_ban_and_unban(self):
        res = self.client.post(
            "/api/banned-emails/", {"email": "Spam@Example.com", "reason": "spam"}, format="json"
        )
        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(res.data["email"], "spam@example.com")
        self.assertEqual(res.data["bannedBy"]["email"], "admin@example.com")

        res = self.client.post("/api/banned-emails/", {"email": "spam@example.com"}, format="json")
        self.assertEqual(res.status_code, 400)

        res = self.client.get("/api/banned-emails/")
        self.assertEqual(len(res.data), 1)

        res = self.client.delete("/api/banned-emails/?email=SPAM@example.com")
        self.assertEqual(res.status_code, 200)
        self.assertFalse(BannedEmail.objects.exists())

        res = self.client.delete("/api/banned-emails/?email=spam@example.com")
        self.assertEqual(res.status_code, 404)

    def test_delete_requires_email(self):
        res = self.client.delete("/api/banned-emails/")
        self.assertEqual(res.status_code, 400)

    def test_capability_required(self):
        limited = User.objects.create_user(
            email="limited@example.com", password="secret1", role="admin", permissions={"users.ban": "deny"}
        )
        self.client.force_authenticate(limited)
        res = self.client.get("/api/banned-emails/")
        self.assertEqual(res.status_code, 403)
