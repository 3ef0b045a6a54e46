from .salon import SalonViewSet

__all__ = ["SalonViewSet"]
