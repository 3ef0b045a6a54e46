# users/serializers/auth.py

from rest_framework import serializers

from users.models import User

PASSWORD_MIN_LENGTH = 6

# data URIs inflate files by ~33%: 15MB of text is roughly a 10MB upload
CERTIFICATE_MAX_CHARS = 15 * 1024 * 1024


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=PASSWORD_MIN_LENGTH)
    name = serializers.CharField(max_length=255)
    userType = serializers.ChoiceField(
        choices=User.UserType.choices,
        required=False,
        default=User.UserType.CUSTOMER,
    )
    certificate = serializers.CharField(
        required=False,
        allow_null=True,
        allow_blank=True,
        max_length=CERTIFICATE_MAX_CHARS,
        error_messages={"max_length": "Certificate file is too large (max 10MB original file)"},
    )

    def validate_name(self, value: str):
        v = (value or "").strip()
        if not v:
            raise serializers.ValidationError("Name is required")
        return v


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)
