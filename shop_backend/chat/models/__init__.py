from .message import ChatMessage

__all__ = ["ChatMessage"]
