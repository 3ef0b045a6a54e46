# notifications/services/exceptions.py

"""
NOTIFICATION SERVICE ERRORS
"""


class NotificationServiceError(Exception):
    """Base exception for notification service failures."""


class NotificationNotFound(NotificationServiceError):
    """Raised when a notification id does not exist."""


class NotificationForbidden(NotificationServiceError):
    """Raised when a user touches a notification that is not theirs, or a non-SYSTEM one."""


class CampaignError(NotificationServiceError):
    """Raised when a broadcast campaign request is invalid."""
