from .post import SocialMediaPostSerializer, SocialMediaPostWriteSerializer, SocialPostValidateSerializer

__all__ = [
    "SocialMediaPostSerializer",
    "SocialMediaPostWriteSerializer",
    "SocialPostValidateSerializer",
]
