# gallery/services/exceptions.py

"""
GALLERY SERVICE ERRORS
"""


class GalleryError(Exception):
    """Base exception for gallery failures."""


class GalleryItemNotFound(GalleryError):
    """Raised when an item or target folder does not exist."""


class DuplicateNameError(GalleryError):
    """Raised when an item with the same name and type already sits in the folder."""


class InvalidMoveError(GalleryError):
    """Raised when moving into a file, into itself, or into a descendant."""


class FolderNotEmptyError(GalleryError):
    """Raised when deleting a folder that still holds items."""


class UploadTooLargeError(GalleryError):
    """Raised when an upload exceeds GALLERY_MAX_UPLOAD_MB."""
