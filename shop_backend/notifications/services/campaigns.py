# notifications/services/campaigns.py

"""
BROADCAST CAMPAIGNS (ADMIN)

A campaign is not a table of its own: an admin broadcast writes one SYSTEM
notification per recipient. The admin console groups them back together by
(title, message, link_url, scheduled_for).

Rules:
- targetAudience "all"      -> every active customer (never admins)
- targetAudience "specific" -> the given user ids (all must exist)
- scheduling requires scheduled_for
- rows are inserted in NOTIFICATION_BATCH_SIZE chunks
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from notifications.models import Notification
from permissions.roles import ROLE_CUSTOMER

from .exceptions import CampaignError, NotificationForbidden, NotificationNotFound

logger = logging.getLogger("notifications")

AUDIENCE_ALL = "all"
AUDIENCE_SPECIFIC = "specific"

STATUS_SCHEDULED = "scheduled"
STATUS_ACTIVE = "active"

CAMPAIGN_PREVIEW_USERS = 5


def _recipient_ids(target_audience: str, user_ids: Optional[Iterable]) -> list:
    User = get_user_model()

    if target_audience == AUDIENCE_ALL:
        return list(
            User.objects.filter(role=ROLE_CUSTOMER, is_active=True)
            .order_by("created_at")
            .values_list("id", flat=True)
        )

    if target_audience != AUDIENCE_SPECIFIC:
        raise CampaignError("targetAudience must be 'all' or 'specific'")

    wanted = [str(u) for u in (user_ids or []) if str(u).strip()]
    if not wanted:
        raise CampaignError("At least one user must be selected for specific targeting")

    found = {str(pk) for pk in User.objects.filter(id__in=wanted).values_list("id", flat=True)}
    missing = [u for u in wanted if u not in found]
    if missing:
        raise CampaignError(f"Unknown user id(s): {', '.join(missing)}")

    # keep request order, drop duplicates
    return list(dict.fromkeys(wanted))


def create_campaign(
    *,
    title: str,
    message: str,
    link_url: str,
    image: str = "",
    target_audience: str = AUDIENCE_ALL,
    user_ids: Optional[Iterable] = None,
    is_scheduled: bool = False,
    scheduled_for=None,
    batch_size: Optional[int] = None,
) -> int:
    if not title or not message or not link_url:
        raise CampaignError("Title, message, and link URL are required")

    if is_scheduled and not scheduled_for:
        raise CampaignError("Scheduled date/time is required when scheduling")

    recipients = _recipient_ids(target_audience, user_ids)
    size = int(batch_size or getattr(settings, "NOTIFICATION_BATCH_SIZE", 100) or 100)

    rows = [
        Notification(
            type=Notification.Type.SYSTEM,
            title=title,
            message=message,
            link_url=link_url,
            image=image or "",
            user_id=user_id,
            is_scheduled=bool(is_scheduled),
            scheduled_for=scheduled_for if is_scheduled else None,
        )
        for user_id in recipients
    ]

    created = 0
    with transaction.atomic():
        for start in range(0, len(rows), size):
            created += len(Notification.objects.bulk_create(rows[start : start + size]))

    logger.info(
        "campaign created",
        extra={"title": title, "recipients": created, "audience": target_audience},
    )
    return created


def campaign_queryset(status: Optional[str] = None, *, now=None):
    now = now or timezone.now()
    qs = Notification.objects.filter(type=Notification.Type.SYSTEM)

    if status == STATUS_SCHEDULED:
        qs = qs.pending(now=now)
    elif status == STATUS_ACTIVE:
        qs = qs.due(now=now)

    return qs.select_related("user").order_by("-created_at")


def _campaign_key(n: Notification) -> tuple:
    scheduled = n.scheduled_for.isoformat() if n.scheduled_for else None
    return (n.title, n.message, n.link_url, scheduled)


def campaign_status(n: Notification, *, now=None) -> str:
    now = now or timezone.now()
    if n.is_scheduled and n.scheduled_for and n.scheduled_for > now:
        return STATUS_SCHEDULED
    return STATUS_ACTIVE


def group_campaigns(notifications: Iterable[Notification], *, now=None) -> list[dict[str, Any]]:
    """
    Collapse per-recipient rows into campaign summaries, newest first.
    """
    now = now or timezone.now()
    groups: dict[tuple, list[Notification]] = {}
    for n in notifications:
        groups.setdefault(_campaign_key(n), []).append(n)

    summaries = []
    for group in groups.values():
        first = group[0]
        read_count = sum(1 for n in group if n.read)
        summaries.append(
            {
                "id": str(first.id),
                "title": first.title,
                "message": first.message,
                "linkUrl": first.link_url,
                "image": first.image or None,
                "type": first.type,
                "scheduledFor": first.scheduled_for,
                "isScheduled": first.is_scheduled,
                "createdAt": first.created_at,
                "updatedAt": first.updated_at,
                "status": campaign_status(first, now=now),
                "isBroadcast": len(group) > 1,
                "totalUsers": len(group),
                "readCount": read_count,
                "unreadCount": len(group) - read_count,
                "notificationIds": [str(n.id) for n in group],
                "users": [
                    {"id": str(n.user.id), "email": n.user.email, "name": n.user.name}
                    for n in group[:CAMPAIGN_PREVIEW_USERS]
                    if n.user is not None
                ],
            }
        )

    summaries.sort(key=lambda s: s["createdAt"], reverse=True)
    return summaries


def get_system_notification(notification_id) -> Notification:
    notification = (
        Notification.objects.select_related("user").filter(pk=notification_id).first()
    )
    if notification is None:
        raise NotificationNotFound("Notification not found")
    if notification.type != Notification.Type.SYSTEM:
        raise NotificationForbidden("Only SYSTEM notifications can be managed here")
    return notification


@transaction.atomic
def update_system_notification(notification: Notification, changes: dict[str, Any]) -> Notification:
    for field in ("title", "message", "link_url"):
        if field in changes and not changes[field]:
            raise CampaignError(f"{field} cannot be blank")

    is_scheduled = changes.get("is_scheduled", notification.is_scheduled)
    scheduled_for = changes.get("scheduled_for", notification.scheduled_for)
    if is_scheduled and not scheduled_for:
        raise CampaignError("Scheduled date/time is required when scheduling")

    for field in ("title", "message", "link_url", "image"):
        if field in changes:
            setattr(notification, field, changes[field] or "")

    notification.is_scheduled = bool(is_scheduled)
    notification.scheduled_for = scheduled_for if is_scheduled else None
    notification.save()
    return notification
