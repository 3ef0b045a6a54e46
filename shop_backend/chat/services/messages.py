# chat/services/messages.py

"""
======================================================
PATH: chat/services/messages.py
======================================================
CUSTOMER CHAT SERVICES

- Customers post messages; staff are told through an admin notification.
- Staff mark messages read or answer them; an answer notifies the customer.
- Notification trouble never fails the chat operation itself.
"""

from __future__ import annotations

import logging

from django.db import transaction
from django.utils import timezone

from chat.models import ChatMessage
from notifications.models import Notification
from notifications.services.dispatch import notify_admins, notify_user

from .exceptions import EmptyMessageError

logger = logging.getLogger("chat")

CUSTOMER_CHAT_LINK = "/chat"
ADMIN_CHAT_LINK = "/admin/chat"


def messages_for(user, *, is_staff: bool):
    qs = ChatMessage.objects.select_related("user")
    if not is_staff:
        qs = qs.filter(user=user)
    return qs.order_by("-created_at")


def _customer_label(user) -> str:
    return getattr(user, "name", "") or user.email or "Customer"


def post_message(user, text) -> ChatMessage:
    text = (text or "").strip() if isinstance(text, str) else ""
    if not text:
        raise EmptyMessageError("Message is required")

    with transaction.atomic():
        chat_message = ChatMessage.objects.create(user=user, message=text)

    notify_admins(
        notification_type=Notification.Type.CHAT_MESSAGE,
        title="New Chat Message",
        message=f"New message from {_customer_label(user)}",
        link_url=ADMIN_CHAT_LINK,
        metadata={
            "chatMessageId": str(chat_message.id),
            "userId": str(user.pk),
            "customerName": getattr(user, "name", "") or None,
            "customerEmail": user.email or None,
        },
    )
    logger.info(
        "chat message posted",
        extra={"chat_message_id": str(chat_message.id), "user_id": str(user.pk)},
    )
    return chat_message


def mark_read(chat_message: ChatMessage) -> ChatMessage:
    chat_message.read_by_admin = True
    chat_message.read_at = timezone.now()
    chat_message.save(update_fields=["read_by_admin", "read_at", "updated_at"])
    return chat_message


def respond(chat_message: ChatMessage, response, *, responder=None) -> ChatMessage:
    response = (response or "").strip() if isinstance(response, str) else ""
    if not response:
        raise EmptyMessageError("Response message is required")

    chat_message.admin_response = response
    chat_message.read_by_admin = True
    chat_message.read_at = timezone.now()
    chat_message.save(update_fields=["admin_response", "read_by_admin", "read_at", "updated_at"])

    notify_user(
        chat_message.user,
        notification_type=Notification.Type.CHAT_MESSAGE,
        title="New reply from our team",
        message=response[:200],
        link_url=CUSTOMER_CHAT_LINK,
        metadata={"chatMessageId": str(chat_message.id)},
    )
    logger.info(
        "chat message answered",
        extra={
            "chat_message_id": str(chat_message.id),
            "responder_id": str(responder.pk) if responder else None,
        },
    )
    return chat_message
