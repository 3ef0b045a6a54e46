# chat/urls.py

"""
CHAT URLS

Mounted at /api/:
    /api/chat/...
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from chat.views import ChatMessageViewSet

router = DefaultRouter()
router.include_root_view = False

router.register(r"chat", ChatMessageViewSet, basename="chat")

urlpatterns = [
    path("", include(router.urls)),
]
