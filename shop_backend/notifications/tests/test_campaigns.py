# notifications/tests/test_campaigns.py

"""
ADMIN CAMPAIGN TESTS

Run with:
    python manage.py test notifications -v 2
"""

from datetime import timedelta

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient

from audit.models import AdminLog
from notifications.models import Notification
from notifications.services.campaigns import create_campaign

User = get_user_model()


class CampaignApiTests(TestCase):
    """
    GUARANTEES:
    - "all" reaches every active customer and never admins
    - "specific" requires user ids; scheduling requires a date
    - rows are grouped back into campaigns with read counts
    - only SYSTEM notifications can be read, edited or deleted here
    """

    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(email="admin@example.com", password="secret1", role="admin")
        self.customers = [
            User.objects.create_user(email=f"c{i}@example.com", password="secret1") for i in range(3)
        ]
        User.objects.create_user(email="gone@example.com", password="secret1", is_active=False)
        self.client.force_authenticate(self.admin)

    def _create(self, **overrides):
        payload = {"title": "Sale", "message": "20% off", "linkUrl": "/shop"}
        payload.update(overrides)
        return self.client.post("/api/admin/notifications/", payload, format="json")

    def test_broadcast_to_all(self):
        res = self._create()
        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(res.data["count"], 3)
        self.assertFalse(Notification.objects.filter(user=self.admin).exists())
        self.assertTrue(AdminLog.objects.filter(resource_type="Notification").exists())

    def test_specific_targets(self):
        res = self._create(targetAudience="specific")
        self.assertEqual(res.status_code, 400)

        res = self._create(targetAudience="specific", userIds=[str(self.customers[0].id)])
        self.assertEqual(res.data["count"], 1)

        res = self._create(targetAudience="specific", userIds=["6f1c2f8e-5a9e-4f57-9a3b-0c0d2b0c1a11"])
        self.assertEqual(res.status_code, 400)

    def test_required_fields(self):
        res = self.client.post("/api/admin/notifications/", {"title": "x"}, format="json")
        self.assertEqual(res.status_code, 400)

    def test_scheduling(self):
        res = self._create(isScheduled=True)
        self.assertEqual(res.status_code, 400)

        later = (timezone.now() + timedelta(days=2)).isoformat()
        res = self._create(isScheduled=True, scheduledFor=later)
        self.assertEqual(res.status_code, 201)

        res = self.client.get("/api/admin/notifications/", {"status": "scheduled"})
        self.assertEqual(len(res.data["notifications"]), 1)
        self.assertEqual(res.data["notifications"][0]["status"], "scheduled")

        res = self.client.get("/api/admin/notifications/", {"status": "active"})
        self.assertEqual(res.data["notifications"], [])

    def test_grouping(self):
        create_campaign(title="A", message="m", link_url="/a")
        create_campaign(title="B", message="m", link_url="/b", batch_size=1)
        Notification.objects.filter(title="A", user=self.customers[0]).update(read=True)

        res = self.client.get("/api/admin/notifications/", {"perPage": 10})
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["pagination"]["total"], 2)
        self.assertEqual(res.data["pagination"]["perPage"], 10)

        campaign_a = next(c for c in res.data["notifications"] if c["title"] == "A")
        self.assertEqual(campaign_a["totalUsers"], 3)
        self.assertEqual(campaign_a["readCount"], 1)
        self.assertEqual(campaign_a["unreadCount"], 2)
        self.assertTrue(campaign_a["isBroadcast"])
        self.assertEqual(len(campaign_a["notificationIds"]), 3)

    def test_detail_only_for_system(self):
        signup = Notification.objects.create(type=Notification.Type.NEW_CUSTOMER, title="t", message="m")
        res = self.client.get(f"/api/admin/notifications/{signup.id}/")
        self.assertEqual(res.status_code, 403)

        res = self.client.delete(f"/api/admin/notifications/{signup.id}/")
        self.assertEqual(res.status_code, 403)
        self.assertTrue(Notification.objects.filter(pk=signup.pk).exists())

    def test_update_and_delete(self):
        create_campaign(title="A", message="m", link_url="/a", target_audience="specific",
                        user_ids=[self.customers[0].id])
        note = Notification.objects.get(title="A")

        res = self.client.patch(f"/api/admin/notifications/{note.id}/", {"title": "A2"}, format="json")
        self.assertEqual(res.status_code, 200, res.data)
        self.assertEqual(res.data["notification"]["title"], "A2")

        res = self.client.delete(f"/api/admin/notifications/{note.id}/")
        self.assertEqual(res.status_code, 200)
        self.assertFalse(Notification.objects.filter(pk=note.pk).exists())

    def test_customer_forbidden(self):
        self.client.force_authenticate(self.customers[0])
        res = self.client.get("/api/admin/notifications/")
        self.assertEqual(res.status_code, 403)
