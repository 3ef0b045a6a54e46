# users/services/accounts.py

"""
ACCOUNT SERVICES

- register_user: storefront signup (customer or professional)
- update_profile: self-service profile edits
- admin_update_user / delete_user: admin console user management
- ban_email / unban_email: registration blocklist

All emails go through normalize_email_address before any lookup.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from notifications.models import Notification
from notifications.services.dispatch import notify_admins
from permissions.roles import ROLE_ADMIN, ROLE_CUSTOMER, clean_overrides
from users.models import BannedEmail, normalize_email_address

from .exceptions import (
    AlreadyBannedError,
    EmailBannedError,
    EmailTakenError,
    InvalidPasswordError,
    NotBannedError,
    SelfDeletionError,
)

logger = logging.getLogger("users")

User = get_user_model()

BANNED_SIGNUP_MESSAGE = (
    "This email address is not allowed to create an account. "
    "Please contact support if you believe this is an error."
)


def _email_taken(email: str, *, exclude_pk=None) -> bool:
    qs = User.objects.filter(email=email)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    return qs.exists()


def _announce_signup(user) -> None:
    """
    Admin notification for a new account. Best-effort.
    """
    base_meta = {"userId": str(user.id), "email": user.email, "name": user.name}

    if user.user_type == User.UserType.PROFESSIONAL:
        has_certificate = bool(user.certificate_url)
        if has_certificate:
            title = "New Professional Certification Upload"
            message = (
                f"{user.name} ({user.email}) has signed up as a professional "
                "and uploaded a certificate for review"
            )
        else:
            title = "New Professional Signup"
            message = (
                f"{user.name} ({user.email}) has signed up as a professional "
                "(no certificate uploaded yet)"
            )
        notify_admins(
            notification_type=Notification.Type.NEW_PROFESSIONAL_CERTIFICATION,
            title=title,
            message=message,
            metadata={**base_meta, "hasCertificate": has_certificate},
        )
        return

    notify_admins(
        notification_type=Notification.Type.NEW_CUSTOMER,
        title="New Customer Signup",
        message=f"{user.name} ({user.email}) has signed up as a new customer",
        metadata=base_meta,
    )


def register_user(
    *,
    email: str,
    password: str,
    name: str,
    user_type: str = "customer",
    certificate: Optional[str] = None,
):
    normalized = normalize_email_address(email)

    if BannedEmail.is_banned(normalized):
        logger.warning("banned email signup attempt", extra={"email": normalized})
        raise EmailBannedError(BANNED_SIGNUP_MESSAGE)

    if _email_taken(normalized):
        raise EmailTakenError("User already exists")

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=normalized,
                password=password,
                name=(name or "").strip(),
                role=ROLE_CUSTOMER,
                user_type=user_type or User.UserType.CUSTOMER,
                certificate_url=certificate or "",
            )
    except IntegrityError:
        # concurrent signup with the same email
        raise EmailTakenError("User already exists")

    logger.info(
        "user registered",
        extra={"user_id": str(user.id), "user_type": user.user_type},
    )
    _announce_signup(user)
    return user


@transaction.atomic
def update_profile(user, changes: dict[str, Any]):
    """
    changes keys: name, email, image, shipping_address, current_password, new_password
    """
    if "email" in changes:
        email = normalize_email_address(changes["email"])
        if _email_taken(email, exclude_pk=user.pk):
            raise EmailTakenError("Email is already taken")
        user.email = email

    for field in ("name", "image", "shipping_address"):
        if field in changes:
            setattr(user, field, (changes[field] or "").strip())

    new_password = (changes.get("new_password") or "").strip()
    if new_password:
        current = changes.get("current_password") or ""
        if not current:
            raise InvalidPasswordError("Current password is required to change password")
        if not user.check_password(current):
            raise InvalidPasswordError("Current password is incorrect")
        user.set_password(new_password)

    user.save()
    return user


@transaction.atomic
def admin_update_user(user, changes: dict[str, Any]):
    """
    changes keys: name, email, password, role, permissions, is_active
    """
    if "email" in changes:
        email = normalize_email_address(changes["email"])
        if _email_taken(email, exclude_pk=user.pk):
            raise EmailTakenError("Email is already taken")
        user.email = email

    if "name" in changes:
        user.name = (changes["name"] or "").strip()

    if changes.get("password"):
        user.set_password(changes["password"])

    if "role" in changes:
        user.role = changes["role"]
        user.is_staff = changes["role"] == ROLE_ADMIN

    if "permissions" in changes:
        user.permissions = clean_overrides(changes["permissions"])

    if "is_active" in changes:
        user.is_active = bool(changes["is_active"])

    user.save()
    return user


@transaction.atomic
def delete_user(*, actor, user) -> None:
    if actor is not None and actor.pk == user.pk:
        raise SelfDeletionError("You cannot delete your own account")
    user.delete()


@transaction.atomic
def ban_email(*, email: str, reason: str = "", banned_by=None) -> BannedEmail:
    normalized = normalize_email_address(email)
    if BannedEmail.objects.filter(email=normalized).exists():
        raise AlreadyBannedError("Email is already banned")

    banned = BannedEmail.objects.create(
        email=normalized,
        reason=(reason or "").strip(),
        banned_by=banned_by if getattr(banned_by, "is_authenticated", False) else None,
    )
    logger.info("email banned", extra={"email": normalized})
    return banned


@transaction.atomic
def unban_email(email: str) -> None:
    normalized = normalize_email_address(email)
    deleted, _ = BannedEmail.objects.filter(email=normalized).delete()
    if not deleted:
        raise NotBannedError("Email is not banned")
    logger.info("email unbanned", extra={"email": normalized})
