# salons/serializers/salon.py

"""
SALON SERIALIZERS

- SalonSerializer: read shape (camelCase). The owner summary is only
  included when the view passes include_owner=True (admin console).
- SalonWriteSerializer: create / partial update input; to_changes() maps to
  model field names for salons.services.directory.
- SalonReviewSerializer / SalonBulk*Serializer: review workflow payloads.
"""

from rest_framework import serializers

from salons.models import Salon

_FIELD_MAP = {
    "name": "name",
    "address": "address",
    "city": "city",
    "postalCode": "postal_code",
    "phone": "phone",
    "email": "email",
    "website": "website",
    "latitude": "latitude",
    "longitude": "longitude",
    "image": "image",
    "logo": "logo",
    "images": "images",
    "description": "description",
    "workingHours": "working_hours",
    "isBioDiamond": "is_bio_diamond",
    "isActive": "is_active",
}

REQUIRED_FIELDS = ("name", "address", "city")


class SalonOwnerSerializer(serializers.Serializer):
    id = serializers.UUIDField(read_only=True)
    name = serializers.CharField(read_only=True)
    email = serializers.EmailField(read_only=True)


class SalonSerializer(serializers.ModelSerializer):
    userId = serializers.UUIDField(source="user_id", read_only=True)
    user = SalonOwnerSerializer(read_only=True)
    postalCode = serializers.CharField(source="postal_code", read_only=True)
    workingHours = serializers.JSONField(source="working_hours", read_only=True)
    isBioDiamond = serializers.BooleanField(source="is_bio_diamond", read_only=True)
    isActive = serializers.BooleanField(source="is_active", read_only=True)
    rejectionReason = serializers.CharField(source="rejection_reason", read_only=True)
    reviewedBy = serializers.UUIDField(source="reviewed_by_id", read_only=True)
    reviewedAt = serializers.DateTimeField(source="reviewed_at", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Salon
        fields = [
            "id",
            "userId",
            "user",
            "name",
            "address",
            "city",
            "postalCode",
            "phone",
            "email",
            "website",
            "latitude",
            "longitude",
            "image",
            "logo",
            "images",
            "description",
            "workingHours",
            "isBioDiamond",
            "isActive",
            "status",
            "rejectionReason",
            "reviewedBy",
            "reviewedAt",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields

    def to_representation(self, instance):
        data = super().to_representation(instance)
        if not self.context.get("include_owner"):
            data.pop("user", None)
        return data


class SalonWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, allow_blank=True)
    address = serializers.CharField(max_length=500, allow_blank=True)
    city = serializers.CharField(max_length=120, allow_blank=True)
    postalCode = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)
    phone = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)
    email = serializers.EmailField(required=False, allow_blank=True, allow_null=True)
    website = serializers.CharField(max_length=500, required=False, allow_blank=True, allow_null=True)
    latitude = serializers.FloatField(required=False, allow_null=True, min_value=-90, max_value=90)
    longitude = serializers.FloatField(required=False, allow_null=True, min_value=-180, max_value=180)
    image = serializers.CharField(required=False, allow_blank=True, allow_null=True, trim_whitespace=False)
    logo = serializers.CharField(required=False, allow_blank=True, allow_null=True, trim_whitespace=False)
    images = serializers.JSONField(required=False, allow_null=True)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    workingHours = serializers.JSONField(required=False, allow_null=True)
    isBioDiamond = serializers.BooleanField(required=False, allow_null=True)
    isActive = serializers.BooleanField(required=False, allow_null=True)

    def to_internal_value(self, data):
        if hasattr(data, "items"):
            data = {k: v for k, v in data.items()}
            for key in ("latitude", "longitude"):
                if data.get(key) == "":
                    data[key] = None
        return super().to_internal_value(data)

    def validate(self, attrs):
        # required text must not be blank once trimmed (partial updates only check what was sent)
        for field in REQUIRED_FIELDS:
            if field in attrs and not (attrs[field] or "").strip():
                raise serializers.ValidationError({field: "This field may not be blank."})
        return attrs

    def to_changes(self) -> dict:
        return {_FIELD_MAP[k]: v for k, v in self.validated_data.items() if k in _FIELD_MAP}


class SalonReviewSerializer(serializers.Serializer):
    action = serializers.CharField()
    rejectionReason = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class SalonBulkActionSerializer(serializers.Serializer):
    salonIds = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)
    action = serializers.CharField()
    rejectionReason = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class SalonBulkDeleteSerializer(serializers.Serializer):
    salonIds = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)
