from .message import ChatMessageSerializer, ChatPostSerializer, ChatRespondSerializer

__all__ = ["ChatMessageSerializer", "ChatPostSerializer", "ChatRespondSerializer"]
