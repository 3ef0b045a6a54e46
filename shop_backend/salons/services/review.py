# salons/services/review.py

"""
SALON REVIEW WORKFLOW

- approve -> APPROVED, active, rejection reason cleared
- reject  -> REJECTED, inactive, reason required
- both stamp reviewed_by / reviewed_at and notify the owner (if any)

Bulk actions additionally support activate / deactivate (no review stamp,
no notification).
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from django.db import transaction
from django.utils import timezone

from notifications.models import Notification
from notifications.services.dispatch import notify_user
from salons.models import Salon

from .exceptions import InvalidReviewError

logger = logging.getLogger("salons")

APPROVE = "approve"
REJECT = "reject"
ACTIVATE = "activate"
DEACTIVATE = "deactivate"

REVIEW_ACTIONS = (APPROVE, REJECT)
BULK_ACTIONS = (APPROVE, REJECT, ACTIVATE, DEACTIVATE)

OWNER_LINK = "/dashboard/salon"


def _clean_reason(action: str, reason: Optional[str], *, plural: bool = False) -> Optional[str]:
    reason = (reason or "").strip()
    if action == REJECT and not reason:
        noun = "salons" if plural else "a salon"
        raise InvalidReviewError(f"Rejection reason is required when rejecting {noun}")
    return reason or None


def _review_fields(action: str, reviewer, reason: Optional[str]) -> dict:
    now = timezone.now()
    if action == APPROVE:
        return {
            "status": Salon.Status.APPROVED,
            "is_active": True,
            "rejection_reason": None,
            "reviewed_by": reviewer,
            "reviewed_at": now,
        }
    return {
        "status": Salon.Status.REJECTED,
        "is_active": False,
        "rejection_reason": reason,
        "reviewed_by": reviewer,
        "reviewed_at": now,
    }


def notify_owner(salon: Salon, action: str, reason: Optional[str] = None) -> None:
    if salon.user_id is None:
        return

    if action == APPROVE:
        notify_user(
            salon.user,
            notification_type=Notification.Type.SALON_APPROVED,
            title="Salon Approved",
            message=(
                f'Your salon "{salon.name}" has been approved and is now visible '
                "on the Find Your Salon page."
            ),
            link_url=OWNER_LINK,
        )
    else:
        notify_user(
            salon.user,
            notification_type=Notification.Type.SALON_REJECTED,
            title="Salon Rejected",
            message=f'Your salon "{salon.name}" has been rejected. Reason: {reason}',
            link_url=OWNER_LINK,
        )


@transaction.atomic
def review_salon(salon: Salon, reviewer, *, action: str, reason: Optional[str] = None) -> Salon:
    if action not in REVIEW_ACTIONS:
        raise InvalidReviewError("Invalid action. Must be 'approve' or 'reject'")
    reason = _clean_reason(action, reason)

    for field, value in _review_fields(action, reviewer, reason).items():
        setattr(salon, field, value)
    salon.save()

    logger.info(
        "salon reviewed",
        extra={"salon_id": str(salon.id), "action": action, "reviewer_id": str(reviewer.pk)},
    )
    notify_owner(salon, action, reason)
    return salon


@transaction.atomic
def bulk_salon_action(
    salon_ids: Iterable,
    reviewer,
    *,
    action: str,
    reason: Optional[str] = None,
) -> int:
    if action not in BULK_ACTIONS:
        raise InvalidReviewError("Valid action (approve, reject, activate, deactivate) is required")

    qs = Salon.objects.filter(pk__in=list(salon_ids))

    if action in (ACTIVATE, DEACTIVATE):
        count = qs.update(is_active=(action == ACTIVATE), updated_at=timezone.now())
        logger.info("salons bulk toggled", extra={"action": action, "count": count})
        return count

    reason = _clean_reason(action, reason, plural=True)
    count = qs.update(updated_at=timezone.now(), **_review_fields(action, reviewer, reason))

    for salon in qs.filter(user__isnull=False).select_related("user"):
        notify_owner(salon, action, reason)

    logger.info("salons bulk reviewed", extra={"action": action, "count": count})
    return count
