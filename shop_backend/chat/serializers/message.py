# chat/serializers/message.py

from rest_framework import serializers

from chat.models import ChatMessage


class ChatUserSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    email = serializers.EmailField()
    name = serializers.CharField()


class ChatMessageSerializer(serializers.ModelSerializer):
    userId = serializers.UUIDField(source="user_id", read_only=True)
    user = ChatUserSerializer(read_only=True)
    adminResponse = serializers.CharField(source="admin_response", read_only=True)
    readByAdmin = serializers.BooleanField(source="read_by_admin", read_only=True)
    readAt = serializers.DateTimeField(source="read_at", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = ChatMessage
        fields = [
            "id",
            "userId",
            "user",
            "message",
            "adminResponse",
            "readByAdmin",
            "readAt",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields


class ChatPostSerializer(serializers.Serializer):
    # blank text is answered with the service's own message
    message = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)


class ChatRespondSerializer(serializers.Serializer):
    adminResponse = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)
