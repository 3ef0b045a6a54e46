from .messages import mark_read, messages_for, post_message, respond

__all__ = ["mark_read", "messages_for", "post_message", "respond"]
