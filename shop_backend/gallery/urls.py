# gallery/urls.py

"""
GALLERY URLS

Mounted at /api/:
    /api/gallery/...

The collection route is declared by hand so DELETE /api/gallery/?id= reaches
destroy_by_query; the router serves everything else.
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from gallery.views import GalleryViewSet

router = DefaultRouter()
router.include_root_view = False

router.register(r"gallery", GalleryViewSet, basename="gallery")

gallery_collection = GalleryViewSet.as_view(
    {"get": "list", "post": "create", "delete": "destroy_by_query"}
)

urlpatterns = [
    path("gallery/", gallery_collection, name="gallery-collection"),
    path("", include(router.urls)),
]
