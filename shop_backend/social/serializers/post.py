# social/serializers/post.py

"""
SOCIAL POST SERIALIZERS

Input keys are camelCase; to_changes() maps them to the keyword names used
by social.services.posts.
"""

from rest_framework import serializers

from social.models import SocialMediaPost

_FIELD_MAP = {
    "platform": "platform",
    "contentType": "content_type",
    "caption": "caption",
    "images": "images",
    "videos": "videos",
    "hashtags": "hashtags",
    "scheduledDate": "scheduled_date",
    "status": "status",
    "assignedReviewerId": "assigned_reviewer_id",
    "reviewComments": "review_comments",
}


class SocialMediaPostSerializer(serializers.ModelSerializer):
    contentType = serializers.CharField(source="content_type", read_only=True)
    scheduledDate = serializers.DateTimeField(source="scheduled_date", read_only=True)
    createdBy = serializers.UUIDField(source="created_by_id", read_only=True)
    assignedReviewerId = serializers.UUIDField(source="assigned_reviewer_id", read_only=True)
    reviewedBy = serializers.UUIDField(source="reviewed_by_id", read_only=True)
    reviewedAt = serializers.DateTimeField(source="reviewed_at", read_only=True)
    reviewComments = serializers.CharField(source="review_comments", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = SocialMediaPost
        fields = [
            "id",
            "platform",
            "contentType",
            "caption",
            "images",
            "videos",
            "hashtags",
            "scheduledDate",
            "status",
            "createdBy",
            "assignedReviewerId",
            "reviewedBy",
            "reviewedAt",
            "reviewComments",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields


class SocialMediaPostWriteSerializer(serializers.Serializer):
    platform = serializers.ChoiceField(choices=SocialMediaPost.Platform.choices, required=False)
    contentType = serializers.ChoiceField(choices=SocialMediaPost.ContentType.choices, required=False)
    caption = serializers.CharField(required=False, allow_blank=True, allow_null=True, trim_whitespace=False)
    images = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False, allow_null=True)
    videos = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False, allow_null=True)
    hashtags = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False, allow_null=True)
    scheduledDate = serializers.DateTimeField()
    status = serializers.ChoiceField(choices=SocialMediaPost.Status.choices, required=False)
    assignedReviewerId = serializers.UUIDField(required=False, allow_null=True)
    reviewComments = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def to_internal_value(self, data):
        if hasattr(data, "items") and data.get("assignedReviewerId") == "":
            data = {k: v for k, v in data.items()}
            data["assignedReviewerId"] = None
        return super().to_internal_value(data)

    def to_changes(self) -> dict:
        return {_FIELD_MAP[k]: v for k, v in self.validated_data.items() if k in _FIELD_MAP}


class SocialPostValidateSerializer(serializers.Serializer):
    platform = serializers.ChoiceField(choices=SocialMediaPost.Platform.choices)
    contentType = serializers.ChoiceField(choices=SocialMediaPost.ContentType.choices)
    caption = serializers.CharField(required=False, allow_blank=True, default="", trim_whitespace=False)
    hashtags = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False, default=list)
    images = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False, default=list)
    videos = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False, default=list)
