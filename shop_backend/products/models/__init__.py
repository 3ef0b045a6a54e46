"""
PATH: products/models/__init__.py

Products models export surface.
"""

from .category import Category, normalize_slug
from .product import Product, discounted_price

__all__ = [
    "Category",
    "Product",
    "discounted_price",
    "normalize_slug",
]
