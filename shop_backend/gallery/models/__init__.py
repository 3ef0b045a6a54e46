from .item import GalleryItem, gallery_upload_to, sanitize_filename

__all__ = ["GalleryItem", "gallery_upload_to", "sanitize_filename"]
