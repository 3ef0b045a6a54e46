# salons/urls.py

"""
SALONS URLS

Mounted at /api/:
    /api/salons/...
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from salons.views import SalonViewSet

router = DefaultRouter()
router.include_root_view = False

router.register(r"salons", SalonViewSet, basename="salons")

urlpatterns = [
    path("", include(router.urls)),
]
