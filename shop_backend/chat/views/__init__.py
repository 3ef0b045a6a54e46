from .message import ChatMessageViewSet

__all__ = ["ChatMessageViewSet"]
