# notifications/serializers/notification.py

from rest_framework import serializers

from notifications.models import Notification
from notifications.services.campaigns import AUDIENCE_ALL, AUDIENCE_SPECIFIC


# ---------------------------
# FEED
# ---------------------------
class FeedQuerySerializer(serializers.Serializer):
    unreadOnly = serializers.BooleanField(required=False, default=False)
    limit = serializers.IntegerField(required=False, default=50, min_value=1, max_value=200)


class FeedUpdateSerializer(serializers.Serializer):
    """
    Either {"markAllAsRead": true} or {"notificationId": "...", "read": bool}.
    """

    markAllAsRead = serializers.BooleanField(required=False, default=False)
    notificationId = serializers.UUIDField(required=False)
    read = serializers.BooleanField(required=False)

    def validate(self, attrs):
        if attrs.get("markAllAsRead"):
            return attrs
        if attrs.get("notificationId") is None or "read" not in attrs:
            raise serializers.ValidationError(
                "Provide markAllAsRead, or notificationId with read."
            )
        return attrs


# ---------------------------
# ADMIN CAMPAIGNS
# ---------------------------
class CampaignCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    message = serializers.CharField()
    linkUrl = serializers.CharField(max_length=1000)
    image = serializers.CharField(required=False, allow_blank=True, default="")
    targetAudience = serializers.ChoiceField(
        choices=[AUDIENCE_ALL, AUDIENCE_SPECIFIC],
        required=False,
        default=AUDIENCE_ALL,
    )
    userIds = serializers.ListField(
        child=serializers.UUIDField(),
        required=False,
        default=list,
    )
    isScheduled = serializers.BooleanField(required=False, default=False)
    scheduledFor = serializers.DateTimeField(required=False, allow_null=True, default=None)

    def validate(self, attrs):
        if attrs["targetAudience"] == AUDIENCE_SPECIFIC and not attrs.get("userIds"):
            raise serializers.ValidationError(
                {"userIds": "At least one user must be selected for specific targeting"}
            )
        if attrs.get("isScheduled") and not attrs.get("scheduledFor"):
            raise serializers.ValidationError(
                {"scheduledFor": "Scheduled date/time is required when scheduling"}
            )
        return attrs


class CampaignUpdateSerializer(serializers.Serializer):
    title = serializers.CharField(required=False, max_length=255)
    message = serializers.CharField(required=False)
    linkUrl = serializers.CharField(required=False, max_length=1000)
    image = serializers.CharField(required=False, allow_blank=True)
    isScheduled = serializers.BooleanField(required=False)
    scheduledFor = serializers.DateTimeField(required=False, allow_null=True)

    FIELD_MAP = {
        "title": "title",
        "message": "message",
        "linkUrl": "link_url",
        "image": "image",
        "isScheduled": "is_scheduled",
        "scheduledFor": "scheduled_for",
    }

    def to_model_changes(self) -> dict:
        return {
            self.FIELD_MAP[key]: value
            for key, value in self.validated_data.items()
            if key in self.FIELD_MAP
        }


class SystemNotificationSerializer(serializers.ModelSerializer):
    linkUrl = serializers.CharField(source="link_url")
    isScheduled = serializers.BooleanField(source="is_scheduled")
    scheduledFor = serializers.DateTimeField(source="scheduled_for", allow_null=True)
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")
    user = serializers.SerializerMethodField()

    class Meta:
        model = Notification
        fields = [
            "id",
            "type",
            "title",
            "message",
            "image",
            "linkUrl",
            "read",
            "isScheduled",
            "scheduledFor",
            "metadata",
            "user",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields

    def get_user(self, obj):
        if obj.user is None:
            return None
        return {"id": str(obj.user.id), "email": obj.user.email, "name": obj.user.name}
