"""
PATH: chat/models/message.py

CUSTOMER CHAT MESSAGE

One row per customer message. Staff answer in place (admin_response) rather
than with a message of their own; answering also marks the row read.
"""

import uuid

from django.conf import settings
from django.db import models


class ChatMessage(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="chat_messages",
    )
    message = models.TextField()
    admin_response = models.TextField(null=True, blank=True)

    read_by_admin = models.BooleanField(default=False)
    read_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "-created_at"], name="chat_user_created_idx"),
            models.Index(fields=["read_by_admin"], name="chat_read_idx"),
        ]

    @property
    def has_response(self) -> bool:
        return bool(self.admin_response)

    def __str__(self):
        return f"{self.user_id}: {self.message[:40]}"
