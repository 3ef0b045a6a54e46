# products/serializers/__init__.py

from .category import (
    CategoryBulkDeleteSerializer,
    CategoryBulkUpdateSerializer,
    CategorySerializer,
    CategorySummarySerializer,
    CategoryWriteSerializer,
)
from .product import (
    ProductBulkDeleteSerializer,
    ProductBulkUpdateSerializer,
    ProductSerializer,
    ProductWriteSerializer,
)

__all__ = [
    "CategoryBulkDeleteSerializer",
    "CategoryBulkUpdateSerializer",
    "CategorySerializer",
    "CategorySummarySerializer",
    "CategoryWriteSerializer",
    "ProductBulkDeleteSerializer",
    "ProductBulkUpdateSerializer",
    "ProductSerializer",
    "ProductWriteSerializer",
]
