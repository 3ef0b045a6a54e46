# products/serializers/product.py

"""
PRODUCT SERIALIZERS

- ProductSerializer: read shape shared by the storefront and the admin console.
- ProductWriteSerializer: admin create / partial update input.
- ProductBulk*Serializer: bulk edit payloads.

Input keys are camelCase (the console sends them that way); to_changes()
maps them to model field names for products.services.catalog.
"""

from decimal import Decimal

from rest_framework import serializers

from products.models import Product

from .category import CategorySummarySerializer

_FIELD_MAP = {
    "name": "name",
    "description": "description",
    "price": "price",
    "image": "image",
    "images": "images",
    "featured": "featured",
    "attributes": "attributes",
    "categoryId": "category_id",
    "discountPercentage": "discount_percentage",
    "showcasingSections": "showcasing_sections",
    "subcategoryIds": "subcategory_ids",
}


def _blank_to_none(data, keys):
    if not hasattr(data, "items"):
        return data
    data = {k: v for k, v in data.items()}
    for key in keys:
        if data.get(key) == "":
            data[key] = None
    return data


class ProductSerializer(serializers.ModelSerializer):
    salePrice = serializers.DecimalField(source="sale_price", max_digits=10, decimal_places=2, read_only=True)
    discountPercentage = serializers.IntegerField(source="discount_percentage", read_only=True)
    categoryId = serializers.UUIDField(source="category_id", read_only=True)
    category = CategorySummarySerializer(read_only=True)
    subcategories = CategorySummarySerializer(many=True, read_only=True)
    showcasingSections = serializers.JSONField(source="showcasing_sections", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "price",
            "salePrice",
            "discountPercentage",
            "image",
            "images",
            "categoryId",
            "category",
            "subcategories",
            "featured",
            "attributes",
            "showcasingSections",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields


class ProductWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    image = serializers.CharField(max_length=1000, required=False, allow_blank=True, allow_null=True)
    images = serializers.ListField(child=serializers.CharField(), required=False, allow_null=True)
    categoryId = serializers.UUIDField(required=False, allow_null=True)
    featured = serializers.BooleanField(required=False)
    attributes = serializers.JSONField(required=False, allow_null=True)
    discountPercentage = serializers.IntegerField(
        required=False, allow_null=True, min_value=0, max_value=100
    )
    showcasingSections = serializers.ListField(child=serializers.CharField(), required=False, allow_null=True)
    subcategoryIds = serializers.ListField(child=serializers.UUIDField(), required=False)

    def to_internal_value(self, data):
        return super().to_internal_value(_blank_to_none(data, ("categoryId", "discountPercentage")))

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Name is required")
        return value

    def validate_price(self, value):
        if value is None or value <= Decimal("0"):
            raise serializers.ValidationError("Price must be greater than zero")
        return value

    def validate_attributes(self, value):
        if value is not None and not isinstance(value, dict):
            raise serializers.ValidationError("Attributes must be an object")
        return value

    def to_changes(self) -> dict:
        return {_FIELD_MAP[k]: v for k, v in self.validated_data.items() if k in _FIELD_MAP}


class ProductBulkUpdatesSerializer(serializers.Serializer):
    categoryId = serializers.UUIDField(required=False, allow_null=True)
    featured = serializers.BooleanField(required=False, allow_null=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, allow_null=True)
    discountPercentage = serializers.IntegerField(
        required=False, allow_null=True, min_value=0, max_value=100
    )
    showcasingSections = serializers.ListField(child=serializers.CharField(), required=False, allow_null=True)
    subcategoryIds = serializers.ListField(child=serializers.UUIDField(), required=False, allow_null=True)

    def to_internal_value(self, data):
        return super().to_internal_value(
            _blank_to_none(data, ("categoryId", "price", "discountPercentage"))
        )

    def validate_price(self, value):
        if value is not None and value <= Decimal("0"):
            raise serializers.ValidationError("Price must be greater than zero")
        return value


class ProductBulkUpdateSerializer(serializers.Serializer):
    productIds = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)
    updates = ProductBulkUpdatesSerializer()

    def to_changes(self) -> dict:
        updates = self.validated_data["updates"]
        return {_FIELD_MAP[k]: v for k, v in updates.items() if k in _FIELD_MAP}


class ProductBulkDeleteSerializer(serializers.Serializer):
    productIds = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)
