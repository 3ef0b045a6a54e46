# megamenu/services/exceptions.py


class MegaMenuError(Exception):
    """Base exception for mega-menu card failures."""


class InvalidCardError(MegaMenuError):
    """Raised for an unknown menu type, an out-of-range slot, or a missing image."""
