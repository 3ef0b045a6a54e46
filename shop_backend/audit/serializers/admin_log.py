# audit/serializers/admin_log.py

from rest_framework import serializers

from audit.models import AdminLog


class AdminLogSerializer(serializers.ModelSerializer):
    user = serializers.SerializerMethodField()
    actionType = serializers.CharField(source="action_type")
    resourceType = serializers.CharField(source="resource_type")
    resourceId = serializers.CharField(source="resource_id", allow_null=True)
    ipAddress = serializers.CharField(source="ip_address", allow_null=True)
    userAgent = serializers.CharField(source="user_agent", allow_null=True)
    createdAt = serializers.DateTimeField(source="created_at")

    class Meta:
        model = AdminLog
        fields = [
            "id",
            "user",
            "actionType",
            "resourceType",
            "resourceId",
            "description",
            "details",
            "metadata",
            "ipAddress",
            "userAgent",
            "createdAt",
        ]
        read_only_fields = fields

    def get_user(self, obj):
        if obj.user is None:
            return None
        return {"id": str(obj.user.id), "name": obj.user.name, "email": obj.user.email}
