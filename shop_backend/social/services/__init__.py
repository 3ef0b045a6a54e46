from .posts import create_post, delete_post, group_by_day, pending_reviews, update_post
from .validation import validate_post

__all__ = [
    "create_post",
    "delete_post",
    "group_by_day",
    "pending_reviews",
    "update_post",
    "validate_post",
]
