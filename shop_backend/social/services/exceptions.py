# social/services/exceptions.py

"""
SOCIAL CALENDAR ERRORS
"""


class SocialServiceError(Exception):
    """Base exception for social calendar failures."""


class InvalidMonthError(SocialServiceError):
    """Raised when a month parameter is not YYYY-MM."""


class ReviewerNotFound(SocialServiceError):
    """Raised when an assigned reviewer id does not match an active user."""
