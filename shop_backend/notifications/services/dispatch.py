# notifications/services/dispatch.py

"""
NOTIFICATION DISPATCH + FEED (APPLICATION SERVICE)

Purpose:
- Emit notifications from other domains (signup, salon review, chat).
- Serve the per-user feed and read/unread updates.

Side-effect rule:
- notify_admins / notify_user are called from inside other flows
  (registration, salon review, chat). A failure here is logged and swallowed
  so the calling operation still succeeds.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from django.db import DatabaseError, transaction
from django.utils import timezone

from notifications.models import Notification
from permissions.roles import is_admin_user

from .exceptions import NotificationForbidden, NotificationNotFound

logger = logging.getLogger("notifications")


def _safe_create(**fields) -> Optional[Notification]:
    try:
        # savepoint: a failed insert must not poison the caller's transaction
        with transaction.atomic():
            return Notification.objects.create(**fields)
    except DatabaseError:
        logger.exception(
            "notification create failed",
            extra={"type": fields.get("type"), "title": fields.get("title")},
        )
        return None


def notify_admins(
    *,
    notification_type: str,
    title: str,
    message: str,
    link_url: str = "",
    image: str = "",
    metadata: Optional[dict[str, Any]] = None,
) -> Optional[Notification]:
    """
    Notification addressed to the admin team (user is NULL).
    """
    notification = _safe_create(
        type=notification_type,
        title=title,
        message=message,
        link_url=link_url or "",
        image=image or "",
        metadata=metadata,
        user=None,
    )
    if notification:
        logger.info(
            "admin notification created",
            extra={"notification_id": str(notification.id), "type": notification_type},
        )
    return notification


def notify_user(
    user,
    *,
    notification_type: str,
    title: str,
    message: str,
    link_url: str = "",
    image: str = "",
    metadata: Optional[dict[str, Any]] = None,
) -> Optional[Notification]:
    if user is None:
        return None

    notification = _safe_create(
        type=notification_type,
        title=title,
        message=message,
        link_url=link_url or "",
        image=image or "",
        metadata=metadata,
        user=user,
    )
    if notification:
        logger.info(
            "user notification created",
            extra={
                "notification_id": str(notification.id),
                "type": notification_type,
                "user_id": str(user.pk),
            },
        )
    return notification


# -----------------------------
# Feed
# -----------------------------
def feed_queryset(user, *, unread_only: bool = False, now=None):
    """
    Admins see every due notification; everyone else sees their own.
    Scheduled notifications stay hidden until scheduled_for has passed.
    """
    qs = Notification.objects.due(now=now or timezone.now())

    if not is_admin_user(user):
        qs = qs.filter(user=user)

    if unread_only:
        qs = qs.filter(read=False)

    return qs.order_by("-created_at")


def format_for_feed(notification: Notification) -> dict[str, Any]:
    return {
        "id": str(notification.id),
        "title": notification.title,
        "message": notification.message,
        "image": notification.image or None,
        "time": notification.created_at.isoformat(),
        "type": notification.type.lower(),
        "read": notification.read,
        "linkUrl": notification.link_url or None,
        "metadata": notification.metadata,
    }


@transaction.atomic
def mark_all_as_read(user) -> int:
    qs = Notification.objects.filter(read=False)
    if not is_admin_user(user):
        qs = qs.filter(user=user)
    return qs.update(read=True, updated_at=timezone.now())


@transaction.atomic
def set_read_state(user, *, notification_id, read: bool) -> Notification:
    notification = (
        Notification.objects.select_for_update().filter(pk=notification_id).first()
    )
    if notification is None:
        raise NotificationNotFound("Notification not found")

    if not is_admin_user(user) and notification.user_id != user.pk:
        raise NotificationForbidden("Forbidden")

    notification.read = bool(read)
    notification.save(update_fields=["read", "updated_at"])
    return notification
