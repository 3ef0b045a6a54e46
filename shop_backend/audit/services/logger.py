# audit/services/logger.py

"""
ADMIN ACTION LOGGER

Purpose:
- Record admin console mutations (who / what / when / from where).

Hard rule:
- log_admin_action NEVER raises. Audit trouble is logged and the caller's
  operation carries on.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from django.core.exceptions import ValidationError
from django.core.serializers.json import DjangoJSONEncoder
from django.core.validators import validate_ipv46_address
from django.db import DatabaseError, transaction

from audit.models import AdminLog

logger = logging.getLogger("audit")

_DESCRIPTION_VERBS = {
    AdminLog.Action.CREATE: "Created",
    AdminLog.Action.UPDATE: "Updated",
    AdminLog.Action.DELETE: "Deleted",
    AdminLog.Action.VIEW: "Viewed",
    AdminLog.Action.EXPORT: "Exported",
    AdminLog.Action.APPROVE: "Approved",
    AdminLog.Action.REJECT: "Rejected",
    AdminLog.Action.ACTIVATE: "Activated",
    AdminLog.Action.DEACTIVATE: "Deactivated",
}


def action_description(action: str, resource_type: str, identifier: Optional[str] = None) -> str:
    suffix = f' "{identifier}"' if identifier else ""
    if action == AdminLog.Action.BULK_OPERATION:
        return f"Bulk operation on {resource_type}{suffix}"
    verb = _DESCRIPTION_VERBS.get(action)
    if verb:
        return f"{verb} {resource_type}{suffix}"
    return f"{action} on {resource_type}{suffix}"


def _jsonable(value):
    return json.loads(json.dumps(value, cls=DjangoJSONEncoder))


def change_details(before: Optional[dict], after: Optional[dict]) -> dict[str, Any]:
    """
    {"before", "after", "changes": {field: {"from", "to"}}}; "changes" is
    omitted when nothing differs.
    """
    before = _jsonable(before or {})
    after = _jsonable(after or {})

    changes = {}
    for key in sorted(set(before) | set(after)):
        if before.get(key) != after.get(key):
            changes[key] = {"from": before.get(key), "to": after.get(key)}

    details: dict[str, Any] = {"before": before, "after": after}
    if changes:
        details["changes"] = changes
    return details


def _valid_ip(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    try:
        validate_ipv46_address(value)
    except ValidationError:
        return None
    return value


def request_info(request) -> tuple[Optional[str], Optional[str]]:
    """
    (ip_address, user_agent). First X-Forwarded-For hop wins, then X-Real-IP,
    then REMOTE_ADDR.
    """
    meta = getattr(request, "META", None) or {}

    forwarded = (meta.get("HTTP_X_FORWARDED_FOR") or "").split(",")[0].strip()
    ip = _valid_ip(forwarded) or _valid_ip(meta.get("HTTP_X_REAL_IP")) or _valid_ip(
        meta.get("REMOTE_ADDR")
    )
    user_agent = meta.get("HTTP_USER_AGENT") or None
    return ip, user_agent


def log_admin_action(
    request,
    *,
    action: str,
    resource_type: str,
    resource_id=None,
    identifier: Optional[str] = None,
    description: Optional[str] = None,
    before: Optional[dict] = None,
    after: Optional[dict] = None,
    details: Optional[dict] = None,
    metadata: Optional[dict] = None,
    user=None,
) -> Optional[AdminLog]:
    try:
        actor = user or getattr(request, "user", None)
        if actor is not None and not getattr(actor, "is_authenticated", False):
            actor = None

        if details is None and (before is not None or after is not None):
            details = change_details(before, after)

        ip_address, user_agent = request_info(request) if request is not None else (None, None)

        meta = {}
        if request is not None:
            meta = {"method": getattr(request, "method", None), "path": getattr(request, "path", None)}
        meta.update(metadata or {})

        with transaction.atomic():
            return AdminLog.objects.create(
                user=actor,
                action_type=action,
                resource_type=resource_type,
                resource_id=str(resource_id) if resource_id is not None else None,
                description=description or action_description(action, resource_type, identifier),
                details=_jsonable(details) if details is not None else None,
                metadata=_jsonable(meta),
                ip_address=ip_address,
                user_agent=user_agent,
            )
    except (DatabaseError, TypeError, ValueError):
        logger.exception(
            "admin action log failed",
            extra={"action": action, "resource_type": resource_type, "resource_id": str(resource_id)},
        )
        return None
