# social/urls.py

"""
SOCIAL URLS

Mounted at /api/:
    /api/social-media/...
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from social.views import SocialMediaPostViewSet

router = DefaultRouter()
router.include_root_view = False

router.register(r"social-media", SocialMediaPostViewSet, basename="social-media")

urlpatterns = [
    path("", include(router.urls)),
]
