# social/services/posts.py

"""
======================================================
PATH: social/services/posts.py
======================================================
SOCIAL CALENDAR SERVICES

Purpose:
- Create / update posts and apply the review workflow rules.
- Month windows and day grouping for the calendar view.

Workflow rules:
- A reviewer assignment is only kept while the post is PENDING_REVIEW.
- Moving out of PENDING_REVIEW clears the assignment.
- APPROVED / REJECTED stamp reviewed_by + reviewed_at (+ comments).
- Changing only the reviewer applies only while the post is pending.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from datetime import date, datetime
from typing import Any, Optional

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from social.models import SocialMediaPost

from .exceptions import InvalidMonthError, ReviewerNotFound

logger = logging.getLogger("social")

Status = SocialMediaPost.Status

_PLAIN_FIELDS = ("platform", "content_type", "caption", "scheduled_date")
_LIST_FIELDS = ("images", "videos", "hashtags")


# -----------------------------
# Month windows
# -----------------------------
def parse_month(value: Optional[str]) -> tuple[int, int]:
    """
    "YYYY-MM" -> (year, month). None / "" means the current month.
    """
    if not value:
        today = timezone.localdate()
        return today.year, today.month
    try:
        parsed = datetime.strptime(value.strip(), "%Y-%m")
    except ValueError:
        raise InvalidMonthError("month must be YYYY-MM") from None
    return parsed.year, parsed.month


def month_window(year: int, month: int) -> tuple[datetime, datetime]:
    """
    [first instant of the month, first instant of the next month) in the
    project time zone.
    """
    start = date(year, month, 1)
    end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    tz = timezone.get_current_timezone()
    return (
        timezone.make_aware(datetime.combine(start, datetime.min.time()), tz),
        timezone.make_aware(datetime.combine(end, datetime.min.time()), tz),
    )


def posts_in_month(qs, year: int, month: int):
    start, end = month_window(year, month)
    return qs.filter(scheduled_date__gte=start, scheduled_date__lt=end)


def group_by_day(posts) -> "OrderedDict[str, list[SocialMediaPost]]":
    days: "OrderedDict[str, list[SocialMediaPost]]" = OrderedDict()
    for post in sorted(posts, key=lambda p: p.scheduled_date):
        key = timezone.localtime(post.scheduled_date).date().isoformat()
        days.setdefault(key, []).append(post)
    return days


def pending_reviews(user=None, *, mine: bool = False):
    qs = SocialMediaPost.objects.filter(status=Status.PENDING_REVIEW)
    if mine and user is not None:
        qs = qs.filter(assigned_reviewer=user)
    return qs.order_by("scheduled_date")


# -----------------------------
# Helpers
# -----------------------------
def _resolve_reviewer(reviewer_id):
    if reviewer_id in (None, ""):
        return None
    reviewer = get_user_model().objects.filter(pk=reviewer_id, is_active=True).first()
    if reviewer is None:
        raise ReviewerNotFound("Reviewer not found")
    return reviewer


def _apply_content(post: SocialMediaPost, data: dict[str, Any]) -> None:
    for field in _PLAIN_FIELDS:
        if field in data and data[field] is not None:
            setattr(post, field, data[field])
    for field in _LIST_FIELDS:
        if field in data:
            setattr(post, field, [str(v).strip() for v in (data[field] or []) if str(v).strip()])


# -----------------------------
# Mutations
# -----------------------------
@transaction.atomic
def create_post(user, data: dict[str, Any]) -> SocialMediaPost:
    post = SocialMediaPost(
        platform=SocialMediaPost.Platform.INSTAGRAM,
        content_type=SocialMediaPost.ContentType.POST,
        status=data.get("status") or Status.DRAFT,
        created_by=user,
    )
    _apply_content(post, data)
    post.caption = post.caption or ""

    if post.status == Status.PENDING_REVIEW:
        post.assigned_reviewer = _resolve_reviewer(data.get("assigned_reviewer_id"))

    post.save()
    logger.info(
        "social post created",
        extra={"post_id": str(post.id), "platform": post.platform, "status": post.status},
    )
    return post


@transaction.atomic
def update_post(post: SocialMediaPost, user, changes: dict[str, Any]) -> SocialMediaPost:
    _apply_content(post, changes)
    if "caption" in changes:
        post.caption = changes["caption"] or ""

    new_status = changes.get("status")
    if new_status:
        post.status = new_status

        if new_status == Status.PENDING_REVIEW:
            if changes.get("assigned_reviewer_id"):
                post.assigned_reviewer = _resolve_reviewer(changes["assigned_reviewer_id"])
        else:
            post.assigned_reviewer = None

        if new_status in (Status.APPROVED, Status.REJECTED):
            post.reviewed_by = user
            post.reviewed_at = timezone.now()
            if changes.get("review_comments"):
                post.review_comments = changes["review_comments"]
    else:
        if "assigned_reviewer_id" in changes and post.status == Status.PENDING_REVIEW:
            post.assigned_reviewer = _resolve_reviewer(changes["assigned_reviewer_id"])
        if "review_comments" in changes:
            post.review_comments = changes["review_comments"]

    post.save()
    logger.info("social post updated", extra={"post_id": str(post.id), "status": post.status})
    return post


def delete_post(post: SocialMediaPost) -> None:
    post_id = str(post.pk)
    post.delete()
    logger.info("social post deleted", extra={"post_id": post_id})
