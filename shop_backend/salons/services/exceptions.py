# salons/services/exceptions.py

"""
SALON SERVICE ERRORS
"""


class SalonServiceError(Exception):
    """Base exception for salon directory failures."""


class SalonAlreadyExistsError(SalonServiceError):
    """Raised when a customer who already owns a salon tries to create another."""


class SalonForbidden(SalonServiceError):
    """Raised when a non-admin touches a salon they do not own."""


class InvalidReviewError(SalonServiceError):
    """Raised for unknown review actions or a rejection without a reason."""
