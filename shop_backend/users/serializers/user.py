# users/serializers/user.py

from rest_framework import serializers

from permissions.roles import ROLE_CHOICES, clean_overrides
from users.models import User

from .auth import PASSWORD_MIN_LENGTH


class UserSerializer(serializers.ModelSerializer):
    """
    Read shape used by the admin console and /auth/me.
    """

    userType = serializers.CharField(source="user_type", read_only=True)
    isActive = serializers.BooleanField(source="is_active", read_only=True)
    certificateUrl = serializers.CharField(source="certificate_url", read_only=True)
    shippingAddress = serializers.CharField(source="shipping_address", read_only=True)
    lastLogin = serializers.DateTimeField(source="last_login", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "name",
            "role",
            "userType",
            "permissions",
            "isActive",
            "image",
            "shippingAddress",
            "certificateUrl",
            "lastLogin",
            "createdAt",
        ]
        read_only_fields = fields


def _validate_permissions(value):
    try:
        return clean_overrides(value)
    except ValueError as exc:
        raise serializers.ValidationError(str(exc))


class AdminUserCreateSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=PASSWORD_MIN_LENGTH)
    name = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    role = serializers.ChoiceField(choices=ROLE_CHOICES, required=False, default="customer")
    permissions = serializers.JSONField(required=False, default=dict)

    def validate_permissions(self, value):
        return _validate_permissions(value)


class AdminUserUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False, min_length=1)
    email = serializers.EmailField(required=False)
    password = serializers.CharField(write_only=True, required=False, min_length=PASSWORD_MIN_LENGTH)
    role = serializers.ChoiceField(choices=ROLE_CHOICES, required=False)
    permissions = serializers.JSONField(required=False)
    isActive = serializers.BooleanField(required=False)

    def validate_permissions(self, value):
        return _validate_permissions(value)

    def to_changes(self) -> dict:
        data = dict(self.validated_data)
        if "isActive" in data:
            data["is_active"] = data.pop("isActive")
        return data


class ProfileUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    email = serializers.EmailField(required=False)
    image = serializers.CharField(max_length=1000, required=False, allow_blank=True, allow_null=True)
    shippingAddress = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    currentPassword = serializers.CharField(write_only=True, required=False, allow_blank=True)
    newPassword = serializers.CharField(write_only=True, required=False, allow_blank=True)

    def validate_newPassword(self, value):
        if value and len(value) < PASSWORD_MIN_LENGTH:
            raise serializers.ValidationError("Password must be at least 6 characters")
        return value

    def validate(self, attrs):
        if attrs.get("newPassword") and not attrs.get("currentPassword"):
            raise serializers.ValidationError(
                {"currentPassword": "Current password is required to change password"}
            )
        return attrs

    def to_changes(self) -> dict:
        mapping = {
            "name": "name",
            "email": "email",
            "image": "image",
            "shippingAddress": "shipping_address",
            "currentPassword": "current_password",
            "newPassword": "new_password",
        }
        return {mapping[k]: v for k, v in self.validated_data.items()}
