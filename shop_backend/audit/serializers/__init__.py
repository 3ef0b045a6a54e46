from .admin_log import AdminLogSerializer

__all__ = ["AdminLogSerializer"]
