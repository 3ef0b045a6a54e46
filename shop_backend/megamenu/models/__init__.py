from .card import MAX_POSITION, MIN_POSITION, MegaMenuCard, megamenu_upload_to

__all__ = ["MAX_POSITION", "MIN_POSITION", "MegaMenuCard", "megamenu_upload_to"]
