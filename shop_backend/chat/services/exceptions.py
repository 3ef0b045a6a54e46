# chat/services/exceptions.py


class ChatError(Exception):
    """Base exception for chat failures."""


class EmptyMessageError(ChatError):
    """Raised when a message or staff response is blank."""
