"""
PATH: users/models/__init__.py

Users models export surface.
"""

from .banned_email import BannedEmail
from .user import User, UserManager, normalize_email_address

__all__ = [
    "User",
    "UserManager",
    "BannedEmail",
    "normalize_email_address",
]
