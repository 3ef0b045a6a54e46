from .item import GalleryViewSet

__all__ = ["GalleryViewSet"]
