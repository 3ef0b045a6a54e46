from .admin_log import AdminLogListView

__all__ = ["AdminLogListView"]
