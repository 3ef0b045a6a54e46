from .admin import CampaignDetailView, CampaignListCreateView
from .feed import NotificationFeedView

__all__ = [
    "NotificationFeedView",
    "CampaignListCreateView",
    "CampaignDetailView",
]
