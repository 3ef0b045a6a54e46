# megamenu/urls.py

"""
MEGA MENU URLS

Mounted at /api/:
    /api/mega-menu-cards/...
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from megamenu.views import MegaMenuCardViewSet

router = DefaultRouter()
router.include_root_view = False

router.register(r"mega-menu-cards", MegaMenuCardViewSet, basename="mega-menu-cards")

urlpatterns = [
    path("", include(router.urls)),
]
