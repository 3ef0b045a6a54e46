from .salon import (
    REQUIRED_FIELDS,
    SalonBulkActionSerializer,
    SalonBulkDeleteSerializer,
    SalonReviewSerializer,
    SalonSerializer,
    SalonWriteSerializer,
)

__all__ = [
    "REQUIRED_FIELDS",
    "SalonBulkActionSerializer",
    "SalonBulkDeleteSerializer",
    "SalonReviewSerializer",
    "SalonSerializer",
    "SalonWriteSerializer",
]
