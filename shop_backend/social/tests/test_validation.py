# social/tests/test_validation.py

"""
PLATFORM LIMITS TESTS

Run with:
    python manage.py test social -v 2
"""

from django.test import SimpleTestCase

from social.services.validation import PLATFORM_LIMITS, validate_post


class PlatformLimitsTests(SimpleTestCase):
    """
    GUARANTEES:
    - Every platform defines limits for POST, STORY and REELS
    - Caption, hashtag and media rules produce readable errors
    - Stories skip caption length checks
    """

    def test_table_is_complete(self):
        for platform, by_type in PLATFORM_LIMITS.items():
            self.assertEqual(set(by_type), {"POST", "STORY", "REELS"}, platform)

    def test_valid_instagram_post(self):
        result = validate_post("INSTAGRAM", "POST", "Hello", ["#nails"], ["a.jpg", "b.jpg"])
        self.assertTrue(result.is_valid)
        self.assertEqual(result.as_dict(), {"isValid": True, "errors": [], "warnings": []})

    def test_caption_too_long_for_twitter(self):
        result = validate_post("TWITTER", "POST", "x" * 281, [], ["a.jpg"])
        self.assertFalse(result.is_valid)
        self.assertIn("Caption exceeds maximum length of 280 characters (current: 281)", result.errors)

    def test_remaining_characters_warning(self):
        result = validate_post("TWITTER", "POST", "x" * 250, [], ["a.jpg"])
        self.assertTrue(result.is_valid)
        self.assertEqual(result.warnings, ["Only 30 characters remaining in caption"])

    def test_story_skips_caption_checks(self):
        result = validate_post("INSTAGRAM", "STORY", "a caption", [], ["a.jpg"])
        self.assertTrue(result.is_valid)
        self.assertEqual(result.warnings, [])

    def test_too_many_hashtags(self):
        result = validate_post("LINKEDIN", "POST", "", ["#a"] * 6, ["a.jpg"])
        self.assertIn("Too many hashtags. Maximum is 5 (current: 6)", result.errors)

    def test_media_rules(self):
        self.assertIn(
            "At least one image or video is required",
            validate_post("INSTAGRAM", "POST", "hi").errors,
        )
        self.assertIn(
            "Only one video is allowed per post",
            validate_post("INSTAGRAM", "POST", "hi", videos=["a.mp4", "b.mp4"]).errors,
        )
        self.assertIn(
            "Cannot mix images and videos in a single post",
            validate_post("INSTAGRAM", "POST", "hi", images=["a.jpg"], videos=["a.mp4"]).errors,
        )
        self.assertIn(
            "TIKTOK does not support multiple images for POST",
            validate_post("TIKTOK", "POST", "hi", images=["a.jpg", "b.jpg"]).errors,
        )

    def test_unknown_platform(self):
        with self.assertRaises(ValueError):
            validate_post("MYSPACE", "POST")
