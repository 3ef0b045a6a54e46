# gallery/serializers/item.py

import uuid

from rest_framework import serializers

from gallery.models import GalleryItem
from gallery.services.library import breadcrumb, children_of


class GalleryItemSerializer(serializers.ModelSerializer):
    """
    childCount comes from the child_count annotation when present.
    """

    folderId = serializers.UUIDField(source="folder_id", read_only=True)
    mimeType = serializers.CharField(source="mime_type", read_only=True)
    childCount = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = GalleryItem
        fields = [
            "id",
            "type",
            "name",
            "description",
            "folderId",
            "url",
            "mimeType",
            "size",
            "childCount",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields

    def get_childCount(self, obj) -> int:
        if not obj.is_folder:
            return 0
        annotated = getattr(obj, "child_count", None)
        if annotated is not None:
            return int(annotated)
        return obj.items.count()


class GalleryItemDetailSerializer(GalleryItemSerializer):
    folder = serializers.SerializerMethodField()
    items = serializers.SerializerMethodField()
    path = serializers.SerializerMethodField()

    class Meta(GalleryItemSerializer.Meta):
        fields = GalleryItemSerializer.Meta.fields + ["folder", "items", "path"]
        read_only_fields = fields

    def get_folder(self, obj):
        if obj.folder is None:
            return None
        return {"id": str(obj.folder.pk), "name": obj.folder.name}

    def get_items(self, obj):
        if not obj.is_folder:
            return []
        return GalleryItemSerializer(children_of(obj), many=True).data

    def get_path(self, obj):
        return breadcrumb(obj)


class GalleryCreateSerializer(serializers.Serializer):
    """
    Multipart body for POST /api/gallery/.

    action=createFolder: name (+ folderId, description)
    action=upload:       file / files (+ folderId, description)
    """

    ACTION_CREATE_FOLDER = "createFolder"
    ACTION_UPLOAD = "upload"

    action = serializers.CharField()
    name = serializers.CharField(required=False, allow_blank=True)
    folderId = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate_folderId(self, value):
        # multipart forms send "" or "null" for the library root
        if value in (None, "", "null"):
            return None
        try:
            return uuid.UUID(str(value))
        except ValueError:
            raise serializers.ValidationError("Must be a valid UUID.")


class GalleryUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class GalleryMoveSerializer(serializers.Serializer):
    folderId = serializers.UUIDField(allow_null=True)


class GalleryBulkDeleteSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)
