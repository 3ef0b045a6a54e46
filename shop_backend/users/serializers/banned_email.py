# users/serializers/banned_email.py

from rest_framework import serializers

from users.models import BannedEmail


class BannedEmailSerializer(serializers.ModelSerializer):
    bannedBy = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = BannedEmail
        fields = ["id", "email", "reason", "bannedBy", "createdAt"]
        read_only_fields = fields

    def get_bannedBy(self, obj):
        if obj.banned_by is None:
            return None
        return {"id": str(obj.banned_by.id), "email": obj.banned_by.email, "name": obj.banned_by.name}


class BanEmailSerializer(serializers.Serializer):
    email = serializers.EmailField()
    reason = serializers.CharField(required=False, allow_blank=True, default="")
