# gallery/views/item.py

"""
GALLERY VIEWSET

Authenticated:
- GET /api/gallery/?folderId=&type=&search=&sortBy=&page=&limit=
- GET /api/gallery/<id>/

Gallery managers (gallery.manage):
- POST   /api/gallery/              multipart, action=createFolder|upload
- PUT    /api/gallery/<id>/         rename / describe (PATCH too)
- DELETE /api/gallery/<id>/         also DELETE /api/gallery/?id=<id>
- POST   /api/gallery/<id>/move/    {folderId}
- POST   /api/gallery/bulk-delete/  {ids}

Managers browse the folder tree; everyone else sees every file flat.
"""

from django.core.exceptions import ValidationError
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from audit.models import AdminLog
from audit.services.logger import log_admin_action
from common.pagination import page_params, paginate, wants_pagination
from common.throttles import UserWriteThrottle
from gallery.models import GalleryItem
from gallery.serializers import (
    GalleryBulkDeleteSerializer,
    GalleryCreateSerializer,
    GalleryItemDetailSerializer,
    GalleryItemSerializer,
    GalleryMoveSerializer,
    GalleryUpdateSerializer,
)
from gallery.services import library
from gallery.services.exceptions import GalleryError, GalleryItemNotFound
from permissions.roles import CAP_GALLERY_MANAGE, HasCapability, user_has_capability

READ_ACTIONS = {"list", "retrieve"}
DEFAULT_PAGE_SIZE = 50


def _error(exc, code):
    return Response({"detail": str(exc)}, status=code)


def _service_error(exc: GalleryError):
    if isinstance(exc, GalleryItemNotFound):
        return _error(exc, status.HTTP_404_NOT_FOUND)
    return _error(exc, status.HTTP_400_BAD_REQUEST)


class GalleryViewSet(viewsets.GenericViewSet):
    serializer_class = GalleryItemSerializer
    queryset = GalleryItem.objects.select_related("folder")
    required_capability = CAP_GALLERY_MANAGE
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def get_permissions(self):
        if self.action in READ_ACTIONS:
            return [IsAuthenticated()]
        return [IsAuthenticated(), HasCapability()]

    def get_throttles(self):
        if self.action == "create":
            return [UserWriteThrottle()]
        return super().get_throttles()

    def is_manager(self) -> bool:
        return user_has_capability(self.request.user, CAP_GALLERY_MANAGE, self.request)

    # -----------------------------
    # Reads
    # -----------------------------
    @extend_schema(
        parameters=[
            OpenApiParameter(name, str, OpenApiParameter.QUERY, required=False)
            for name in ("folderId", "type", "search", "sortBy", "page", "limit")
        ],
        responses={200: GalleryItemSerializer(many=True)},
    )
    def list(self, request):
        params = request.query_params
        try:
            qs = library.browse(
                is_admin=self.is_manager(),
                folder_id=params.get("folderId") or None,
                item_type=params.get("type"),
                search=params.get("search", ""),
                sort=params.get("sortBy", library.DEFAULT_SORT),
            )
            if not wants_pagination(params):
                return Response(GalleryItemSerializer(qs, many=True).data)

            page, limit = page_params(params, default_limit=DEFAULT_PAGE_SIZE)
            items, window = paginate(qs, page=page, limit=limit)
        except ValidationError:
            # malformed folderId
            return Response({"detail": "Invalid folderId"}, status=status.HTTP_400_BAD_REQUEST)

        return Response(
            {
                "items": GalleryItemSerializer(items, many=True).data,
                "pagination": window.as_dict(),
            }
        )

    @extend_schema(responses={200: GalleryItemDetailSerializer})
    def retrieve(self, request, pk=None):
        item = self.get_object()
        if item.is_folder and not self.is_manager():
            raise NotFound("Item not found")
        return Response(GalleryItemDetailSerializer(item).data)

    # -----------------------------
    # Create folder / upload
    # -----------------------------
    @extend_schema(request=GalleryCreateSerializer, responses={201: GalleryItemSerializer})
    def create(self, request):
        serializer = GalleryCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        verb = data["action"]

        if verb == GalleryCreateSerializer.ACTION_CREATE_FOLDER:
            return self._create_folder(request, data)
        if verb == GalleryCreateSerializer.ACTION_UPLOAD:
            return self._upload(request, data)
        return Response({"detail": "Invalid action"}, status=status.HTTP_400_BAD_REQUEST)

    def _create_folder(self, request, data):
        name = (data.get("name") or "").strip()
        if not name:
            return Response({"detail": "Folder name is required"}, status=status.HTTP_400_BAD_REQUEST)

        try:
            folder = library.create_folder(
                name,
                folder_id=data.get("folderId"),
                description=data.get("description"),
            )
        except GalleryError as exc:
            return _service_error(exc)

        payload = GalleryItemSerializer(folder).data
        log_admin_action(
            request,
            action=AdminLog.Action.CREATE,
            resource_type="GalleryFolder",
            resource_id=folder.id,
            identifier=folder.name,
            after=payload,
        )
        return Response(payload, status=status.HTTP_201_CREATED)

    def _upload(self, request, data):
        files = request.FILES.getlist("file") + request.FILES.getlist("files")
        if not files:
            return Response({"detail": "No file provided"}, status=status.HTTP_400_BAD_REQUEST)

        try:
            items = library.upload_files(
                files,
                folder_id=data.get("folderId"),
                description=data.get("description"),
            )
        except GalleryError as exc:
            return _service_error(exc)

        payload = GalleryItemSerializer(items, many=True).data
        for item in items:
            log_admin_action(
                request,
                action=AdminLog.Action.CREATE,
                resource_type="GalleryFile",
                resource_id=item.id,
                identifier=item.name,
                metadata={"size": item.size, "mimeType": item.mime_type},
            )

        if len(payload) == 1:
            return Response(payload[0], status=status.HTTP_201_CREATED)
        return Response({"items": payload}, status=status.HTTP_201_CREATED)

    # -----------------------------
    # Rename / describe
    # -----------------------------
    @extend_schema(request=GalleryUpdateSerializer, responses={200: GalleryItemSerializer})
    def update(self, request, pk=None):
        item = self.get_object()
        serializer = GalleryUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        before = GalleryItemSerializer(item).data
        try:
            item = library.update_item(
                item,
                name=data.get("name"),
                description=data.get("description"),
                set_description="description" in data,
            )
        except GalleryError as exc:
            return _service_error(exc)

        after = GalleryItemSerializer(item).data
        log_admin_action(
            request,
            action=AdminLog.Action.UPDATE,
            resource_type="GalleryItem",
            resource_id=item.id,
            identifier=item.name,
            before=before,
            after=after,
        )
        return Response(after)

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    # -----------------------------
    # Delete
    # -----------------------------
    def destroy(self, request, pk=None):
        return self._delete(request, self.get_object())

    @extend_schema(parameters=[OpenApiParameter("id", str, OpenApiParameter.QUERY, required=True)])
    def destroy_by_query(self, request):
        item_id = request.query_params.get("id")
        if not item_id:
            return Response({"detail": "Item ID is required"}, status=status.HTTP_400_BAD_REQUEST)
        try:
            item = GalleryItem.objects.filter(pk=item_id).first()
        except ValidationError:
            item = None
        if item is None:
            return Response({"detail": "Item not found"}, status=status.HTTP_404_NOT_FOUND)
        return self._delete(request, item)

    def _delete(self, request, item):
        item_id, name, resource_type = (
            item.id,
            item.name,
            "GalleryFolder" if item.is_folder else "GalleryFile",
        )
        try:
            library.delete_item(item)
        except GalleryError as exc:
            return _service_error(exc)

        log_admin_action(
            request,
            action=AdminLog.Action.DELETE,
            resource_type=resource_type,
            resource_id=item_id,
            identifier=name,
        )
        return Response({"success": True})

    # -----------------------------
    # Move / bulk delete
    # -----------------------------
    @extend_schema(request=GalleryMoveSerializer, responses={200: GalleryItemSerializer})
    @action(detail=True, methods=["post"], url_path="move")
    def move(self, request, pk=None):
        item = self.get_object()
        serializer = GalleryMoveSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        target = serializer.validated_data["folderId"]
        previous = str(item.folder_id) if item.folder_id else None

        try:
            item = library.move_item(item, target)
        except GalleryError as exc:
            return _service_error(exc)

        log_admin_action(
            request,
            action=AdminLog.Action.UPDATE,
            resource_type="GalleryItem",
            resource_id=item.id,
            identifier=item.name,
            details={"from": previous, "to": str(target) if target else None},
            metadata={"operation": "move"},
        )
        return Response(GalleryItemSerializer(item).data)

    @extend_schema(request=GalleryBulkDeleteSerializer, responses={200: dict})
    @action(detail=False, methods=["post"], url_path="bulk-delete")
    def bulk_delete(self, request):
        serializer = GalleryBulkDeleteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ids = [str(i) for i in serializer.validated_data["ids"]]

        result = library.bulk_delete(ids)

        log_admin_action(
            request,
            action=AdminLog.Action.BULK_OPERATION,
            resource_type="GalleryItem",
            description=f"Bulk deleted {len(result.deleted)} gallery item(s)",
            details=result.as_dict(),
        )
        return Response(result.as_dict())
