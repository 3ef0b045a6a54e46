# products/services/exceptions.py

"""
CATALOG SERVICE ERRORS
"""


class CatalogError(Exception):
    """Base exception for catalog failures."""


class CategoryNotFound(CatalogError):
    """Raised when a referenced category does not exist."""


class DuplicateSlugError(CatalogError):
    """Raised when a category slug is already taken."""


class CategoryInUseError(CatalogError):
    """Raised when deleting categories that still have products."""

    def __init__(self, message, *, categories=None):
        super().__init__(message)
        self.categories = list(categories or [])


class InvalidSubcategoryError(CatalogError):
    """Raised when subcategory ids are unknown or point at top-level categories."""


class NoUpdatesError(CatalogError):
    """Raised when a bulk update carries nothing to apply."""


class InvalidParentError(CatalogError):
    """Raised when a category would become its own parent."""
