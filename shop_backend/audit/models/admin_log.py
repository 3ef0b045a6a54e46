# audit/models/admin_log.py

import uuid

from django.conf import settings
from django.db import models


class AdminLog(models.Model):
    """
    Append-only trail of what admins did in the console.

    details carries {"before", "after", "changes"} for updates;
    metadata carries request context (method, path) plus anything the
    caller adds (counts for bulk operations, ...).
    """

    class Action(models.TextChoices):
        CREATE = "CREATE", "Create"
        UPDATE = "UPDATE", "Update"
        DELETE = "DELETE", "Delete"
        VIEW = "VIEW", "View"
        EXPORT = "EXPORT", "Export"
        APPROVE = "APPROVE", "Approve"
        REJECT = "REJECT", "Reject"
        ACTIVATE = "ACTIVATE", "Activate"
        DEACTIVATE = "DEACTIVATE", "Deactivate"
        BULK_OPERATION = "BULK_OPERATION", "Bulk operation"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="admin_logs",
    )

    action_type = models.CharField(max_length=32, choices=Action.choices, db_index=True)
    resource_type = models.CharField(max_length=64, db_index=True)
    resource_id = models.CharField(max_length=64, null=True, blank=True)
    description = models.TextField()

    details = models.JSONField(null=True, blank=True)
    metadata = models.JSONField(null=True, blank=True)

    ip_address = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.TextField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["resource_type", "action_type"], name="audit_resource_action_idx"),
        ]

    def __str__(self):
        return f"{self.action_type} {self.resource_type} ({self.created_at:%Y-%m-%d %H:%M})"
