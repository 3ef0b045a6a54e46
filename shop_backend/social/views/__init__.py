from .post import SocialMediaPostViewSet

__all__ = ["SocialMediaPostViewSet"]
