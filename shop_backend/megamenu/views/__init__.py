from .card import MegaMenuCardViewSet

__all__ = ["MegaMenuCardViewSet"]
