from .post import SocialMediaPost

__all__ = ["SocialMediaPost"]
