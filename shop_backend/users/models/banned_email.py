# users/models/banned_email.py

import uuid

from django.conf import settings
from django.db import models

from .user import normalize_email_address


class BannedEmail(models.Model):
    """
    Email addresses that may not register.

    Stored normalized (trimmed, lower-case); lookups must normalize too.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    email = models.EmailField(unique=True)
    reason = models.TextField(blank=True)

    banned_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="banned_emails",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def save(self, *args, **kwargs):
        self.email = normalize_email_address(self.email)
        super().save(*args, **kwargs)

    @classmethod
    def is_banned(cls, email) -> bool:
        normalized = normalize_email_address(email)
        if not normalized:
            return False
        return cls.objects.filter(email=normalized).exists()

    def __str__(self):
        return self.email
