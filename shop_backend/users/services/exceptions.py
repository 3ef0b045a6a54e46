# users/services/exceptions.py

"""
USER SERVICE ERRORS
"""


class UserServiceError(Exception):
    """Base exception for account service failures."""


class EmailBannedError(UserServiceError):
    """Raised when a banned email tries to register."""


class EmailTakenError(UserServiceError):
    """Raised when an email already belongs to another account."""


class InvalidPasswordError(UserServiceError):
    """Raised when a password change fails verification."""


class SelfDeletionError(UserServiceError):
    """Raised when an admin tries to delete their own account."""


class AlreadyBannedError(UserServiceError):
    """Raised when an email is already on the banned list."""


class NotBannedError(UserServiceError):
    """Raised when unbanning an email that is not banned."""
