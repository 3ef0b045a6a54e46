from .item import (
    GalleryBulkDeleteSerializer,
    GalleryCreateSerializer,
    GalleryItemDetailSerializer,
    GalleryItemSerializer,
    GalleryMoveSerializer,
    GalleryUpdateSerializer,
)

__all__ = [
    "GalleryBulkDeleteSerializer",
    "GalleryCreateSerializer",
    "GalleryItemDetailSerializer",
    "GalleryItemSerializer",
    "GalleryMoveSerializer",
    "GalleryUpdateSerializer",
]
