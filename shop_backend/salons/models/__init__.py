from .salon import Salon

__all__ = ["Salon"]
