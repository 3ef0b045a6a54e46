# audit/tests/test_logger.py

"""
ADMIN ACTION LOGGER TESTS

Run with:
    python manage.py test audit -v 2
"""

from django.contrib.auth import get_user_model
from django.test import RequestFactory, TestCase

from audit.models import AdminLog
from audit.services.logger import change_details, log_admin_action, request_info

User = get_user_model()


class LogAdminActionTests(TestCase):
    """
    GUARANTEES:
    - a log row carries actor, request info and a generated description
    - before/after produce a field-level change map
    - logging failures never break the calling request
    """

    def setUp(self):
        self.factory = RequestFactory()
        self.admin = User.objects.create_user(email="admin@example.com", password="secret1", role="admin")

    def _request(self, **meta):
        request = self.factory.post("/api/admin/products/", **meta)
        request.user = self.admin
        return request

    def test_creates_row(self):
        request = self._request(HTTP_USER_AGENT="tests", REMOTE_ADDR="10.0.0.5")
        log = log_admin_action(
            request,
            action=AdminLog.Action.CREATE,
            resource_type="Product",
            resource_id="abc",
            identifier="Lipstick",
        )

        self.assertIsNotNone(log)
        self.assertEqual(log.user, self.admin)
        self.assertEqual(log.description, 'Created Product "Lipstick"')
        self.assertEqual(log.ip_address, "10.0.0.5")
        self.assertEqual(log.user_agent, "tests")
        self.assertEqual(log.metadata["method"], "POST")
        self.assertEqual(log.metadata["path"], "/api/admin/products/")

    def test_before_after_changes(self):
        log = log_admin_action(
            self._request(),
            action=AdminLog.Action.UPDATE,
            resource_type="Product",
            before={"name": "A", "price": "1.00"},
            after={"name": "B", "price": "1.00"},
        )
        self.assertEqual(log.details["changes"], {"name": {"from": "A", "to": "B"}})

    def test_failure_returns_none(self):
        log = log_admin_action(
            self._request(),
            action=AdminLog.Action.UPDATE,
            resource_type="Product",
            details={"bad": object()},
        )
        self.assertIsNone(log)
        self.assertEqual(AdminLog.objects.count(), 0)

    def test_without_request(self):
        log = log_admin_action(
            None, action=AdminLog.Action.BULK_OPERATION, resource_type="Product", user=self.admin
        )
        self.assertEqual(log.description, "Bulk operation on Product")
        self.assertIsNone(log.ip_address)


class HelperTests(TestCase):
    def test_change_details_without_changes(self):
        details = change_details({"a": 1}, {"a": 1})
        self.assertNotIn("changes", details)

    def test_forwarded_for_first_hop(self):
        request = RequestFactory().get(
            "/", HTTP_X_FORWARDED_FOR="203.0.113.9, 10.0.0.1", REMOTE_ADDR="10.0.0.1"
        )
        self.assertEqual(request_info(request), ("203.0.113.9", None))

    def test_invalid_forwarded_for_falls_back(self):
        request = RequestFactory().get("/", HTTP_X_FORWARDED_FOR="garbage", REMOTE_ADDR="10.0.0.1")
        self.assertEqual(request_info(request)[0], "10.0.0.1")
