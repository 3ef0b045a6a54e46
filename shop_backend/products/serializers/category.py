# products/serializers/category.py

from rest_framework import serializers

from products.models import Category, normalize_slug


class CategorySerializer(serializers.ModelSerializer):
    """
    Read shape for admin tables and storefront menus.

    quantity comes from a Count("products") annotation when present.
    """

    parentId = serializers.UUIDField(source="parent_id", read_only=True)
    quantity = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Category
        fields = [
            "id",
            "name",
            "slug",
            "description",
            "image",
            "icon",
            "parentId",
            "quantity",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields

    def get_quantity(self, obj) -> int:
        annotated = getattr(obj, "quantity", None)
        if annotated is not None:
            return int(annotated)
        return obj.products.count()


class CategorySummarySerializer(serializers.ModelSerializer):
    parentId = serializers.UUIDField(source="parent_id", read_only=True)

    class Meta:
        model = Category
        fields = ["id", "name", "slug", "parentId"]
        read_only_fields = fields


class CategoryWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    slug = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    image = serializers.CharField(max_length=1000, required=False, allow_blank=True, allow_null=True)
    icon = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    parentId = serializers.UUIDField(required=False, allow_null=True)

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Name is required")
        return value

    def validate_slug(self, value):
        slug = normalize_slug(value)
        if not slug:
            raise serializers.ValidationError("Slug is required")
        return slug

    def to_changes(self) -> dict:
        data = dict(self.validated_data)
        if "parentId" in data:
            data["parent_id"] = data.pop("parentId")
        return data


class CategoryBulkDeleteSerializer(serializers.Serializer):
    categoryIds = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)


class CategoryBulkUpdatesSerializer(serializers.Serializer):
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    image = serializers.CharField(max_length=1000, required=False, allow_blank=True, allow_null=True)
    icon = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    parentId = serializers.UUIDField(required=False, allow_null=True)


class CategoryBulkUpdateSerializer(serializers.Serializer):
    categoryIds = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)
    updates = CategoryBulkUpdatesSerializer()

    def to_changes(self) -> dict:
        updates = dict(self.validated_data["updates"])
        if "parentId" in updates:
            updates["parent_id"] = updates.pop("parentId")
        return updates
