from .directory import bulk_delete_salons, create_salon, delete_salon, salon_for_user, update_salon
from .review import bulk_salon_action, review_salon

__all__ = [
    "bulk_delete_salons",
    "bulk_salon_action",
    "create_salon",
    "delete_salon",
    "review_salon",
    "salon_for_user",
    "update_salon",
]
