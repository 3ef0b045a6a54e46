# users/api_urls.py

"""
Account management routes mounted at /api/:
- /api/users/profile/   (self-service)
- /api/users/...        (admin console)
- /api/banned-emails/   (admin console)
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import BannedEmailView, ProfileView, UserAdminViewSet

router = DefaultRouter()
router.include_root_view = False
router.register(r"users", UserAdminViewSet, basename="users")

urlpatterns = [
    # before the router so "profile" is never read as a user id
    path("users/profile/", ProfileView.as_view(), name="user-profile"),
    path("banned-emails/", BannedEmailView.as_view(), name="banned-emails"),
    path("", include(router.urls)),
]
