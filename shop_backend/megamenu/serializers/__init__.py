from .card import MegaMenuCardSerializer, MegaMenuCardUpdateSerializer, MegaMenuCardUpsertSerializer

__all__ = ["MegaMenuCardSerializer", "MegaMenuCardUpdateSerializer", "MegaMenuCardUpsertSerializer"]
