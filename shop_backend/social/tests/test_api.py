# social/tests/test_api.py

"""
SOCIAL CALENDAR API TESTS

Run with:
    python manage.py test social -v 2
"""

from datetime import datetime

from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings
from django.utils import timezone
from rest_framework.test import APIClient

from audit.models import AdminLog
from social.models import SocialMediaPost

User = get_user_model()


def _at(year, month, day, hour=12):
    return timezone.make_aware(datetime(year, month, day, hour, 0))


@override_settings(TIME_ZONE="UTC")
class SocialCalendarApiTests(TestCase):
    """
    GUARANTEES:
    - month filter covers the whole calendar month, posts ordered by date
    - calendar groups posts by day
    - pending-reviews can narrow to the caller's assignments
    - staff without social capabilities are refused
    """

    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(email="admin@example.com", password="pass1234", role="admin")
        self.client.force_authenticate(self.admin)

        self.first = SocialMediaPost.objects.create(scheduled_date=_at(2026, 3, 1, 0))
        self.last = SocialMediaPost.objects.create(
            scheduled_date=_at(2026, 3, 31, 23), platform="TIKTOK"
        )
        self.same_day = SocialMediaPost.objects.create(
            scheduled_date=_at(2026, 3, 1, 18),
            status=SocialMediaPost.Status.PENDING_REVIEW,
            assigned_reviewer=self.admin,
        )
        self.april = SocialMediaPost.objects.create(
            scheduled_date=_at(2026, 4, 1, 0),
            status=SocialMediaPost.Status.PENDING_REVIEW,
        )

    def test_month_filter(self):
        res = self.client.get("/api/social-media/", {"month": "2026-03"})
        self.assertEqual(res.status_code, 200)
        self.assertEqual(
            [p["id"] for p in res.data],
            [str(self.first.id), str(self.same_day.id), str(self.last.id)],
        )

    def test_invalid_month(self):
        res = self.client.get("/api/social-media/", {"month": "2026-13"})
        self.assertEqual(res.status_code, 400)

        res = self.client.get("/api/social-media/calendar/", {"month": "March"})
        self.assertEqual(res.status_code, 400)

    def test_status_and_platform_filters(self):
        res = self.client.get("/api/social-media/", {"platform": "TIKTOK"})
        self.assertEqual([p["id"] for p in res.data], [str(self.last.id)])

        res = self.client.get("/api/social-media/", {"status": "PENDING_REVIEW"})
        self.assertEqual(len(res.data), 2)

    def test_calendar_groups_by_day(self):
        res = self.client.get("/api/social-media/calendar/", {"month": "2026-03"})
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["month"], "2026-03")
        self.assertEqual(list(res.data["days"]), ["2026-03-01", "2026-03-31"])
        self.assertEqual(len(res.data["days"]["2026-03-01"]), 2)

    def test_pending_reviews(self):
        res = self.client.get("/api/social-media/pending-reviews/")
        self.assertEqual(len(res.data), 2)

        res = self.client.get("/api/social-media/pending-reviews/", {"mine": "true"})
        self.assertEqual([p["id"] for p in res.data], [str(self.same_day.id)])

    def test_customer_forbidden(self):
        customer = User.objects.create_user(email="c@example.com", password="pass1234")
        self.client.force_authenticate(customer)
        res = self.client.get("/api/social-media/")
        self.assertEqual(res.status_code, 403)


class SocialWorkflowApiTests(TestCase):
    """
    GUARANTEES:
    - create defaults to INSTAGRAM / POST / DRAFT and drops reviewers unless pending
    - leaving PENDING_REVIEW clears the reviewer
    - APPROVED / REJECTED stamp the reviewer, and need social.review
    - validate answers {isValid, errors, warnings}
    """

    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(email="admin@example.com", password="pass1234", role="admin")
        self.reviewer = User.objects.create_user(email="rev@example.com", password="pass1234", role="admin")
        self.client.force_authenticate(self.admin)

    def test_create_defaults(self):
        res = self.client.post(
            "/api/social-media/",
            {"scheduledDate": "2026-05-01T10:00:00Z", "assignedReviewerId": str(self.reviewer.id)},
            format="json",
        )
        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(res.data["platform"], "INSTAGRAM")
        self.assertEqual(res.data["contentType"], "POST")
        self.assertEqual(res.data["status"], "DRAFT")
        self.assertIsNone(res.data["assignedReviewerId"])
        self.assertEqual(res.data["createdBy"], str(self.admin.id))
        self.assertTrue(AdminLog.objects.filter(resource_type="SocialMediaPost").exists())

    def test_create_requires_schedule(self):
        res = self.client.post("/api/social-media/", {"caption": "hi"}, format="json")
        self.assertEqual(res.status_code, 400)

    def test_create_pending_with_unknown_reviewer(self):
        res = self.client.post(
            "/api/social-media/",
            {
                "scheduledDate": "2026-05-01T10:00:00Z",
                "status": "PENDING_REVIEW",
                "assignedReviewerId": "6f1c2f8e-5a9e-4f57-9a3b-0c0d2b0c1a11",
            },
            format="json",
        )
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["detail"], "Reviewer not found")

    def test_review_workflow(self):
        post = SocialMediaPost.objects.create(
            scheduled_date=timezone.now(),
            status=SocialMediaPost.Status.PENDING_REVIEW,
            assigned_reviewer=self.reviewer,
        )

        res = self.client.put(
            f"/api/social-media/{post.id}/",
            {"status": "APPROVED", "reviewComments": "Looks great"},
            format="json",
        )
        self.assertEqual(res.status_code, 200, res.data)
        self.assertEqual(res.data["reviewedBy"], str(self.admin.id))
        self.assertIsNotNone(res.data["reviewedAt"])
        self.assertEqual(res.data["reviewComments"], "Looks great")
        self.assertIsNone(res.data["assignedReviewerId"])

    def test_reviewer_change_only_while_pending(self):
        post = SocialMediaPost.objects.create(scheduled_date=timezone.now())

        res = self.client.patch(
            f"/api/social-media/{post.id}/", {"assignedReviewerId": str(self.reviewer.id)}, format="json"
        )
        self.assertEqual(res.status_code, 200)
        self.assertIsNone(res.data["assignedReviewerId"])

    def test_approval_needs_review_capability(self):
        editor = User.objects.create_user(
            email="editor@example.com",
            password="pass1234",
            role="admin",
            permissions={"social.review": "deny"},
        )
        post = SocialMediaPost.objects.create(scheduled_date=timezone.now())

        self.client.force_authenticate(editor)
        res = self.client.patch(f"/api/social-media/{post.id}/", {"status": "APPROVED"}, format="json")
        self.assertEqual(res.status_code, 403)

        res = self.client.patch(f"/api/social-media/{post.id}/", {"caption": "New"}, format="json")
        self.assertEqual(res.status_code, 200)

    def test_delete(self):
        post = SocialMediaPost.objects.create(scheduled_date=timezone.now())
        res = self.client.delete(f"/api/social-media/{post.id}/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data, {"success": True})

    def test_validate(self):
        res = self.client.post(
            "/api/social-media/validate/",
            {"platform": "TWITTER", "contentType": "POST", "caption": "x" * 300, "images": []},
            format="json",
        )
        self.assertEqual(res.status_code, 200)
        self.assertFalse(res.data["isValid"])
        self.assertEqual(len(res.data["errors"]), 2)
