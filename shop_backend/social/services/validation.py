# social/services/validation.py

"""
======================================================
PATH: social/services/validation.py
======================================================
PLATFORM LIMITS CHECK

Pure functions; no database access.

Checks per (platform, content type):
- caption max / min length (stories carry no caption and skip this)
- hashtag count
- at least one media item, at most one video, no mixing images and videos
- video support / multiple-image support
- warning when fewer than 50 caption characters remain
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

INSTAGRAM = "INSTAGRAM"
FACEBOOK = "FACEBOOK"
TWITTER = "TWITTER"
LINKEDIN = "LINKEDIN"
TIKTOK = "TIKTOK"

POST = "POST"
STORY = "STORY"
REELS = "REELS"

CAPTION_WARNING_THRESHOLD = 50


@dataclass(frozen=True)
class PlatformLimits:
    caption_max_length: int
    hashtags_max: int
    supports_video: bool = True
    supports_multiple_images: bool = False
    caption_min_length: Optional[int] = None
    video_max_size_mb: Optional[int] = None
    video_max_duration: Optional[int] = None


def _story(hashtags_max: int, video_max_size_mb: int, video_max_duration: int) -> PlatformLimits:
    return PlatformLimits(
        caption_max_length=0,
        hashtags_max=hashtags_max,
        video_max_size_mb=video_max_size_mb,
        video_max_duration=video_max_duration,
    )


PLATFORM_LIMITS: dict[str, dict[str, PlatformLimits]] = {
    INSTAGRAM: {
        POST: PlatformLimits(2200, 30, supports_multiple_images=True, caption_min_length=0,
                             video_max_size_mb=100, video_max_duration=60),
        STORY: _story(10, 100, 15),
        REELS: PlatformLimits(2200, 30, video_max_size_mb=100, video_max_duration=90),
    },
    FACEBOOK: {
        POST: PlatformLimits(63206, 30, supports_multiple_images=True,
                             video_max_size_mb=1024, video_max_duration=240),
        STORY: _story(10, 100, 20),
        REELS: PlatformLimits(2200, 30, video_max_size_mb=100, video_max_duration=90),
    },
    TWITTER: {
        POST: PlatformLimits(280, 10, supports_multiple_images=True, caption_min_length=0,
                             video_max_size_mb=512, video_max_duration=140),
        STORY: _story(0, 512, 140),
        REELS: PlatformLimits(280, 10, video_max_size_mb=512, video_max_duration=140),
    },
    LINKEDIN: {
        POST: PlatformLimits(3000, 5, video_max_size_mb=200, video_max_duration=600),
        STORY: _story(0, 200, 20),
        REELS: PlatformLimits(3000, 5, video_max_size_mb=200, video_max_duration=600),
    },
    TIKTOK: {
        POST: PlatformLimits(2200, 100, video_max_size_mb=287, video_max_duration=600),
        STORY: _story(0, 287, 15),
        REELS: PlatformLimits(2200, 100, video_max_size_mb=287, video_max_duration=600),
    },
}


@dataclass
class ValidationResult:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def as_dict(self) -> dict:
        return {"isValid": self.is_valid, "errors": self.errors, "warnings": self.warnings}


def limits_for(platform: str, content_type: str) -> PlatformLimits:
    try:
        return PLATFORM_LIMITS[platform][content_type]
    except KeyError:
        raise ValueError(f"Unknown platform/content type: {platform}/{content_type}") from None


def validate_post(
    platform: str,
    content_type: str,
    caption: str = "",
    hashtags: Sequence[str] = (),
    images: Sequence[str] = (),
    videos: Sequence[str] = (),
) -> ValidationResult:
    limits = limits_for(platform, content_type)
    result = ValidationResult()
    caption = caption or ""
    is_story = content_type == STORY

    if not is_story:
        if len(caption) > limits.caption_max_length:
            result.errors.append(
                f"Caption exceeds maximum length of {limits.caption_max_length} characters "
                f"(current: {len(caption)})"
            )
        if limits.caption_min_length is not None and len(caption) < limits.caption_min_length:
            result.errors.append(
                f"Caption must be at least {limits.caption_min_length} characters "
                f"(current: {len(caption)})"
            )

    if len(hashtags) > limits.hashtags_max:
        result.errors.append(
            f"Too many hashtags. Maximum is {limits.hashtags_max} (current: {len(hashtags)})"
        )

    if not images and not videos:
        result.errors.append("At least one image or video is required")

    if videos and not limits.supports_video:
        result.errors.append(f"{platform} does not support video for {content_type}")

    if len(images) > 1 and not limits.supports_multiple_images:
        result.errors.append(f"{platform} does not support multiple images for {content_type}")

    if len(videos) > 1:
        result.errors.append("Only one video is allowed per post")

    if images and videos:
        result.errors.append("Cannot mix images and videos in a single post")

    if not is_story:
        remaining = limits.caption_max_length - len(caption)
        if 0 <= remaining < CAPTION_WARNING_THRESHOLD:
            result.warnings.append(f"Only {remaining} characters remaining in caption")

    return result
