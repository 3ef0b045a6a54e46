# permissions/roles.py

from __future__ import annotations

from typing import Optional

from rest_framework.permissions import BasePermission


# =========================================================
# ROLE CONSTANTS
# =========================================================
# Two account roles: store staff (admin console) and shoppers / salon owners.
ROLE_ADMIN = "admin"
ROLE_CUSTOMER = "customer"

ROLES = {
    ROLE_ADMIN,
    ROLE_CUSTOMER,
}

ROLE_CHOICES = [
    (ROLE_ADMIN, "Admin"),
    (ROLE_CUSTOMER, "Customer"),
]


# =========================================================
# CAPABILITIES (THE REAL PERMISSION LANGUAGE)
# =========================================================
# Views protect capabilities, not raw roles.
CAP_CATALOG_EDIT = "catalog.edit"
CAP_CATALOG_EXPORT = "catalog.export"

CAP_USERS_MANAGE = "users.manage"
CAP_USERS_BAN = "users.ban"

CAP_SALONS_MANAGE = "salons.manage"
CAP_SALONS_REVIEW = "salons.review"

CAP_SOCIAL_EDIT = "social.edit"
CAP_SOCIAL_REVIEW = "social.review"

CAP_GALLERY_MANAGE = "gallery.manage"

CAP_NOTIFICATIONS_BROADCAST = "notifications.broadcast"

CAP_CHAT_RESPOND = "chat.respond"

CAP_MEGAMENU_EDIT = "megamenu.edit"

CAP_AUDIT_VIEW = "audit.view"

ALL_CAPABILITIES = {
    CAP_CATALOG_EDIT,
    CAP_CATALOG_EXPORT,
    CAP_USERS_MANAGE,
    CAP_USERS_BAN,
    CAP_SALONS_MANAGE,
    CAP_SALONS_REVIEW,
    CAP_SOCIAL_EDIT,
    CAP_SOCIAL_REVIEW,
    CAP_GALLERY_MANAGE,
    CAP_NOTIFICATIONS_BROADCAST,
    CAP_CHAT_RESPOND,
    CAP_MEGAMENU_EDIT,
    CAP_AUDIT_VIEW,
}


# =========================================================
# ROLE → CAPABILITY MAP (DEFAULT)
# =========================================================
ROLE_CAPABILITIES: dict[str, set[str]] = {
    ROLE_ADMIN: {
        *ALL_CAPABILITIES,
    },
    ROLE_CUSTOMER: set(),
}


# =========================================================
# PER-USER OVERRIDES
# =========================================================
# User.permissions is a JSON object: {"<capability>": "allow" | "deny"}.
OVERRIDE_ALLOW = "allow"
OVERRIDE_DENY = "deny"


# =========================================================
# Helpers
# =========================================================
def get_user_role(user) -> Optional[str]:
    return getattr(user, "role", None)


def is_admin_user(user) -> bool:
    if not user or not getattr(user, "is_authenticated", False):
        return False
    return get_user_role(user) == ROLE_ADMIN


def clean_overrides(raw) -> dict[str, str]:
    """
    Validate a permissions override map.

    Unknown capabilities and values other than allow/deny raise ValueError so
    that the admin API can answer 400 instead of storing junk.
    """
    if raw in (None, ""):
        return {}
    if not isinstance(raw, dict):
        raise ValueError("permissions must be an object of capability -> allow|deny")

    cleaned: dict[str, str] = {}
    for cap, value in raw.items():
        if cap not in ALL_CAPABILITIES:
            raise ValueError(f"Unknown capability: {cap}")
        v = str(value or "").strip().lower()
        if v not in {OVERRIDE_ALLOW, OVERRIDE_DENY}:
            raise ValueError(f"Override for {cap} must be 'allow' or 'deny'")
        cleaned[cap] = v
    return cleaned


def effective_capabilities_for(request, user) -> set[str]:
    """
    Compute capabilities from role, then apply per-user allow/deny overrides.
    Inactive users have none.
    """
    if not user or not getattr(user, "is_active", True):
        return set()

    role = get_user_role(user)
    caps = set(ROLE_CAPABILITIES.get(role, set()))

    overrides = getattr(user, "permissions", None) or {}
    if isinstance(overrides, dict):
        for cap, value in overrides.items():
            if cap not in ALL_CAPABILITIES:
                continue
            if value == OVERRIDE_ALLOW:
                caps.add(cap)
            elif value == OVERRIDE_DENY:
                caps.discard(cap)

    return caps


def user_has_capability(user, capability: str, request=None) -> bool:
    if not user or not getattr(user, "is_authenticated", False):
        return False
    return capability in effective_capabilities_for(request, user)


# =========================================================
# Capability Permissions
# =========================================================
class HasCapability(BasePermission):
    """
    Require a specific capability.

    Usage:
        permission_classes = [IsAuthenticated, HasCapability]
        view.required_capability = CAP_SALONS_REVIEW
    """

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False

        required = getattr(view, "required_capability", None)
        if not required:
            # If not set, deny-by-default to avoid accidental open endpoints
            return False

        caps = effective_capabilities_for(request, user)
        return required in caps


class HasAnyCapability(BasePermission):
    """
    Require ANY capability from a list.

    Usage:
        view.required_any_capabilities = {CAP_SOCIAL_EDIT, CAP_SOCIAL_REVIEW}
    """

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False

        required = getattr(view, "required_any_capabilities", None)
        if not required:
            return False

        caps = effective_capabilities_for(request, user)
        return any(cap in caps for cap in set(required))
