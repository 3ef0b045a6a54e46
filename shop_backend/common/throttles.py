# common/throttles.py

"""
Scoped throttles for public / abuse-prone endpoints.
Rates live in REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"].
"""

from rest_framework.throttling import AnonRateThrottle, UserRateThrottle


class PublicWriteThrottle(AnonRateThrottle):
    scope = "public_write"


class PublicCatalogThrottle(AnonRateThrottle):
    scope = "public_catalog"


class UserWriteThrottle(UserRateThrottle):
    """Per-account limit for customer-originated writes (chat, salon signup)."""

    scope = "public_write"
