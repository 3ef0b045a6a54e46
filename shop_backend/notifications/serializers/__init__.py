from .notification import (
    CampaignCreateSerializer,
    CampaignUpdateSerializer,
    FeedQuerySerializer,
    FeedUpdateSerializer,
    SystemNotificationSerializer,
)

__all__ = [
    "FeedQuerySerializer",
    "FeedUpdateSerializer",
    "CampaignCreateSerializer",
    "CampaignUpdateSerializer",
    "SystemNotificationSerializer",
]
