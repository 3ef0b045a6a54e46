# users/tests/test_auth.py

"""
AUTH API TESTS

Run with:
    python manage.py test users -v 2
"""

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from notifications.models import Notification
from users.models import BannedEmail

User = get_user_model()


class RegistrationTests(TestCase):
    """
    GUARANTEES:
    - signup stores a normalized email and never grants admin
    - banned emails get 403, duplicates 400
    - admins are notified about new customers and professionals
    """

    def setUp(self):
        self.client = APIClient()

    def test_register_customer(self):
        res = self.client.post(
            "/api/auth/register/",
            {"email": "  Jane@Example.com ", "password": "secret1", "name": "Jane", "role": "admin"},
            format="json",
        )
        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(res.data["email"], "jane@example.com")
        self.assertEqual(res.data["role"], "customer")
        self.assertEqual(res.data["userType"], "customer")
        self.assertNotIn("password", res.data)

        notification = Notification.objects.get(type=Notification.Type.NEW_CUSTOMER)
        self.assertIsNone(notification.user)
        self.assertEqual(notification.metadata["email"], "jane@example.com")

    def test_register_professional_with_certificate(self):
        res = self.client.post(
            "/api/auth/register/",
            {
                "email": "pro@example.com",
                "password": "secret1",
                "name": "Pro",
                "userType": "professional",
                "certificate": "data:application/pdf;base64,AAAA",
            },
            format="json",
        )
        self.assertEqual(res.status_code, 201, res.data)
        notification = Notification.objects.get(type=Notification.Type.NEW_PROFESSIONAL_CERTIFICATION)
        self.assertEqual(notification.title, "New Professional Certification Upload")
        self.assertTrue(notification.metadata["hasCertificate"])

    def test_duplicate_email(self):
        User.objects.create_user(email="jane@example.com", password="secret1")
        res = self.client.post(
            "/api/auth/register/",
            {"email": "JANE@example.com", "password": "secret1", "name": "Jane"},
            format="json",
        )
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["detail"], "User already exists")

    def test_banned_email(self):
        BannedEmail.objects.create(email="spam@example.com")
        res = self.client.post(
            "/api/auth/register/",
            {"email": "Spam@Example.com", "password": "secret1", "name": "Spam"},
            format="json",
        )
        self.assertEqual(res.status_code, 403)
        self.assertFalse(User.objects.filter(email="spam@example.com").exists())

    def test_validation(self):
        res = self.client.post(
            "/api/auth/register/",
            {"email": "x@example.com", "password": "123", "name": "  "},
            format="json",
        )
        self.assertEqual(res.status_code, 400)
        self.assertIn("password", res.data)
        self.assertIn("name", res.data)


class LoginTests(TestCase):
    """
    GUARANTEES:
    - login is case-insensitive on email and returns a JWT pair
    - wrong passwords and inactive accounts get 401
    - /auth/me lists effective capabilities
    """

    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(email="jane@example.com", password="secret1", name="Jane")

    def test_login(self):
        res = self.client.post(
            "/api/auth/login/", {"email": "JANE@example.com", "password": "secret1"}, format="json"
        )
        self.assertEqual(res.status_code, 200)
        self.assertIn("access", res.data)
        self.assertIn("refresh", res.data)
        self.assertEqual(res.data["user"]["email"], "jane@example.com")

        self.user.refresh_from_db()
        self.assertIsNotNone(self.user.last_login)

    def test_bad_credentials(self):
        res = self.client.post(
            "/api/auth/login/", {"email": "jane@example.com", "password": "wrong"}, format="json"
        )
        self.assertEqual(res.status_code, 401)

        self.user.is_active = False
        self.user.save()
        res = self.client.post(
            "/api/auth/login/", {"email": "jane@example.com", "password": "secret1"}, format="json"
        )
        self.assertEqual(res.status_code, 401)

    def test_token_authenticates(self):
        res = self.client.post(
            "/api/auth/login/", {"email": "jane@example.com", "password": "secret1"}, format="json"
        )
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {res.data['access']}")
        res = self.client.get("/api/auth/me/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["capabilities"], [])

    def test_me_requires_auth(self):
        res = self.client.get("/api/auth/me/")
        self.assertEqual(res.status_code, 401)

    def test_admin_capabilities(self):
        admin = User.objects.create_user(
            email="admin@example.com",
            password="secret1",
            role="admin",
            permissions={"users.ban": "deny"},
        )
        self.client.force_authenticate(admin)
        res = self.client.get("/api/auth/me/")
        self.assertIn("users.manage", res.data["capabilities"])
        self.assertNotIn("users.ban", res.data["capabilities"])


class ProfileTests(TestCase):
    """
    GUARANTEES:
    - users edit their own name, email and shipping address
    - password changes need the current password
    - another account's email cannot be taken
    """

    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(email="jane@example.com", password="secret1", name="Jane")
        User.objects.create_user(email="taken@example.com", password="secret1")
        self.client.force_authenticate(self.user)

    def test_get_profile(self):
        res = self.client.get("/api/users/profile/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["user"]["email"], "jane@example.com")

    def test_update_profile(self):
        res = self.client.patch(
            "/api/users/profile/",
            {"name": " Janet ", "shippingAddress": "1 Main St"},
            format="json",
        )
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["user"]["name"], "Janet")
        self.assertEqual(res.data["user"]["shippingAddress"], "1 Main St")

    def test_email_taken(self):
        res = self.client.patch("/api/users/profile/", {"email": "TAKEN@example.com"}, format="json")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["detail"], "Email is already taken")

    def test_change_password(self):
        res = self.client.patch("/api/users/profile/", {"newPassword": "newsecret"}, format="json")
        self.assertEqual(res.status_code, 400)

        res = self.client.patch(
            "/api/users/profile/",
            {"currentPassword": "wrong", "newPassword": "newsecret"},
            format="json",
        )
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["detail"], "Current password is incorrect")

        res = self.client.patch(
            "/api/users/profile/",
            {"currentPassword": "secret1", "newPassword": "newsecret"},
            format="json",
        )
        self.assertEqual(res.status_code, 200)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password("newsecret"))
