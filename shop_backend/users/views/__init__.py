from .admin_users import UserAdminViewSet
from .auth import LoginView, RegisterView
from .banned_emails import BannedEmailView
from .me import MeView, ProfileView

__all__ = [
    "RegisterView",
    "LoginView",
    "MeView",
    "ProfileView",
    "UserAdminViewSet",
    "BannedEmailView",
]
