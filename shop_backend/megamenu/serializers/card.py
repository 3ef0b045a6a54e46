# megamenu/serializers/card.py

from rest_framework import serializers

from megamenu.models import MegaMenuCard


class MegaMenuCardSerializer(serializers.ModelSerializer):
    menuType = serializers.CharField(source="menu_type", read_only=True)
    imageUrl = serializers.CharField(source="image_url", read_only=True)
    linkUrl = serializers.CharField(source="link_url", read_only=True)
    isActive = serializers.BooleanField(source="is_active", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = MegaMenuCard
        fields = [
            "id",
            "menuType",
            "position",
            "imageUrl",
            "linkUrl",
            "isActive",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields


class MegaMenuCardUpsertSerializer(serializers.Serializer):
    """
    Multipart body for POST /api/mega-menu-cards/. Slot values are checked by
    the service so the admin console gets one readable message.
    """

    REQUIRED_FIELDS = ("menuType", "position", "linkUrl")

    menuType = serializers.CharField(required=False, allow_blank=True)
    position = serializers.CharField(required=False, allow_blank=True)
    linkUrl = serializers.CharField(required=False, allow_blank=True)
    isActive = serializers.BooleanField(required=False, default=False)
    existingImageUrl = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def missing_required(self) -> bool:
        data = self.validated_data
        return any(not str(data.get(name) or "").strip() for name in self.REQUIRED_FIELDS)


_FIELD_MAP = {
    "imageUrl": "image_url",
    "linkUrl": "link_url",
    "isActive": "is_active",
}


class MegaMenuCardUpdateSerializer(serializers.Serializer):
    imageUrl = serializers.CharField(required=False)
    linkUrl = serializers.CharField(required=False)
    isActive = serializers.BooleanField(required=False)

    def to_changes(self) -> dict:
        return {_FIELD_MAP[k]: v for k, v in self.validated_data.items() if k in _FIELD_MAP}
