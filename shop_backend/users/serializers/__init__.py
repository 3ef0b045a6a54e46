from .auth import LoginSerializer, RegisterSerializer
from .banned_email import BanEmailSerializer, BannedEmailSerializer
from .user import (
    AdminUserCreateSerializer,
    AdminUserUpdateSerializer,
    ProfileUpdateSerializer,
    UserSerializer,
)

__all__ = [
    "RegisterSerializer",
    "LoginSerializer",
    "UserSerializer",
    "AdminUserCreateSerializer",
    "AdminUserUpdateSerializer",
    "ProfileUpdateSerializer",
    "BannedEmailSerializer",
    "BanEmailSerializer",
]
