# notifications/models/notification.py

import uuid

from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils import timezone


class NotificationQuerySet(models.QuerySet):
    def due(self, now=None):
        """
        Unscheduled rows, plus scheduled rows whose time has come.
        """
        now = now or timezone.now()
        return self.filter(
            Q(is_scheduled=False) | Q(is_scheduled=True, scheduled_for__lte=now)
        )

    def pending(self, now=None):
        now = now or timezone.now()
        return self.filter(is_scheduled=True, scheduled_for__gt=now)


class Notification(models.Model):
    """
    In-app notification.

    Addressing:
    - user set   -> shown to that user (and to admins)
    - user NULL  -> addressed to the admin team (signups, chat, ...)

    SYSTEM notifications are the ones admins broadcast as campaigns; only
    those can be edited or deleted from the admin console.
    """

    class Type(models.TextChoices):
        SYSTEM = "SYSTEM", "System"
        NEW_CUSTOMER = "NEW_CUSTOMER", "New customer"
        NEW_PROFESSIONAL_CERTIFICATION = (
            "NEW_PROFESSIONAL_CERTIFICATION",
            "New professional certification",
        )
        SALON_APPROVED = "SALON_APPROVED", "Salon approved"
        SALON_REJECTED = "SALON_REJECTED", "Salon rejected"
        CHAT_MESSAGE = "CHAT_MESSAGE", "Chat message"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    type = models.CharField(max_length=40, choices=Type.choices, db_index=True)
    title = models.CharField(max_length=255)
    message = models.TextField()
    image = models.CharField(max_length=1000, blank=True)
    link_url = models.CharField(max_length=1000, blank=True)
    metadata = models.JSONField(null=True, blank=True)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="notifications",
    )

    read = models.BooleanField(default=False)

    is_scheduled = models.BooleanField(default=False)
    scheduled_for = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = NotificationQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "read"], name="notif_user_read_idx"),
            models.Index(fields=["type", "created_at"], name="notif_type_created_idx"),
        ]

    @property
    def is_due(self) -> bool:
        if not self.is_scheduled:
            return True
        return bool(self.scheduled_for and self.scheduled_for <= timezone.now())

    def __str__(self):
        return f"{self.type}: {self.title}"
