# notifications/urls.py

from django.urls import path

from .views import CampaignDetailView, CampaignListCreateView, NotificationFeedView

app_name = "notifications"

urlpatterns = [
    path("notifications/", NotificationFeedView.as_view(), name="feed"),
    # ---------------- ADMIN CONSOLE ----------------
    path("admin/notifications/", CampaignListCreateView.as_view(), name="campaigns"),
    path(
        "admin/notifications/<uuid:pk>/",
        CampaignDetailView.as_view(),
        name="campaign-detail",
    ),
]
