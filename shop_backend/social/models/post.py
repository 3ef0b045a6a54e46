# social/models/post.py

import uuid

from django.conf import settings
from django.db import models


class SocialMediaPost(models.Model):
    """
    A planned post on the marketing calendar.

    Review workflow:
    DRAFT -> PENDING_REVIEW (optionally assigned to a reviewer)
          -> APPROVED | REJECTED -> PUBLISHED

    images / videos hold media URLs (usually gallery files); hashtags are
    stored without validation, platform limits are checked separately.
    """

    class Platform(models.TextChoices):
        INSTAGRAM = "INSTAGRAM", "Instagram"
        FACEBOOK = "FACEBOOK", "Facebook"
        TWITTER = "TWITTER", "Twitter"
        LINKEDIN = "LINKEDIN", "LinkedIn"
        TIKTOK = "TIKTOK", "TikTok"

    class ContentType(models.TextChoices):
        POST = "POST", "Post"
        STORY = "STORY", "Story"
        REELS = "REELS", "Reels"

    class Status(models.TextChoices):
        DRAFT = "DRAFT", "Draft"
        PENDING_REVIEW = "PENDING_REVIEW", "Pending review"
        APPROVED = "APPROVED", "Approved"
        REJECTED = "REJECTED", "Rejected"
        PUBLISHED = "PUBLISHED", "Published"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    platform = models.CharField(max_length=20, choices=Platform.choices, default=Platform.INSTAGRAM)
    content_type = models.CharField(max_length=10, choices=ContentType.choices, default=ContentType.POST)

    caption = models.TextField(blank=True)
    images = models.JSONField(default=list, blank=True)
    videos = models.JSONField(default=list, blank=True)
    hashtags = models.JSONField(default=list, blank=True)

    scheduled_date = models.DateTimeField(db_index=True)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.DRAFT, db_index=True)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="social_posts",
    )
    assigned_reviewer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="assigned_social_reviews",
    )
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="reviewed_social_posts",
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)
    review_comments = models.TextField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["scheduled_date"]
        indexes = [
            models.Index(fields=["status", "scheduled_date"], name="social_status_sched_idx"),
            models.Index(fields=["platform"], name="social_platform_idx"),
        ]

    def __str__(self):
        return f"{self.platform} {self.content_type} @ {self.scheduled_date:%Y-%m-%d}"
