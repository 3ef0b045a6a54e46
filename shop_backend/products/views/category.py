# products/views/category.py

"""
CATEGORY VIEWSET

- GET    /api/categories/?search=&parentId=&topLevel=&page=&limit=   (AllowAny)
- GET    /api/categories/<id>/                                     (AllowAny)
- POST   /api/categories/                 {name, slug, ...}          (catalog.edit)
- PATCH  /api/categories/<id>/                                       (catalog.edit)
- DELETE /api/categories/<id>/            400 while products remain  (catalog.edit)
- POST   /api/categories/<id>/duplicate/                             (catalog.edit)
- PATCH  /api/categories/bulk/            {categoryIds, updates}     (catalog.edit)
- DELETE /api/categories/bulk/            {categoryIds}              (catalog.edit)
- GET    /api/categories/export/?format=csv|json                     (catalog.export)

The list is always paginated: {"categories", "pagination"}.
"""

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from audit.models import AdminLog
from audit.services.logger import log_admin_action
from common.exports import ExportFormatError, export_response
from common.pagination import page_params, paginate
from common.throttles import PublicCatalogThrottle
from permissions.roles import CAP_CATALOG_EDIT, CAP_CATALOG_EXPORT, HasCapability
from products.filters import CategoryFilter
from products.serializers import (
    CategoryBulkDeleteSerializer,
    CategoryBulkUpdateSerializer,
    CategorySerializer,
    CategoryWriteSerializer,
)
from products.services import catalog
from products.services.exceptions import (
    CategoryInUseError,
    CategoryNotFound,
    DuplicateSlugError,
    InvalidParentError,
    NoUpdatesError,
)

PUBLIC_ACTIONS = {"list", "retrieve"}
CATEGORIES_DEFAULT_LIMIT = 10
# the console loads every category into its dropdowns
CATEGORIES_MAX_LIMIT = 1000

EXPORT_COLUMNS = [
    ("id", "ID"),
    ("name", "Name"),
    ("slug", "Slug"),
    ("description", "Description"),
    ("parentId", "Parent ID"),
    ("quantity", "Products"),
    ("createdAt", "Created At"),
]


class CategoryViewSet(viewsets.ModelViewSet):
    serializer_class = CategorySerializer
    required_capability = CAP_CATALOG_EDIT
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]

    def get_permissions(self):
        if self.action in PUBLIC_ACTIONS:
            return [AllowAny()]
        if self.action == "export":
            self.required_capability = CAP_CATALOG_EXPORT
        return [IsAuthenticated(), HasCapability()]

    def get_throttles(self):
        if self.action in PUBLIC_ACTIONS:
            return [PublicCatalogThrottle()]
        return super().get_throttles()

    def get_queryset(self):
        return catalog.categories_with_quantity().order_by("name")

    def _filtered(self, request):
        filterset = CategoryFilter(request.query_params, queryset=self.get_queryset())
        if not filterset.is_valid():
            return None, Response(filterset.errors, status=status.HTTP_400_BAD_REQUEST)
        return filterset.qs, None

    @extend_schema(
        parameters=[
            OpenApiParameter(name, str, OpenApiParameter.QUERY, required=False)
            for name in ("search", "parentId", "topLevel", "page", "limit")
        ],
        responses={200: dict},
    )
    def list(self, request, *args, **kwargs):
        qs, error = self._filtered(request)
        if error is not None:
            return error

        page, limit = page_params(
            request.query_params,
            default_limit=CATEGORIES_DEFAULT_LIMIT,
            max_limit=CATEGORIES_MAX_LIMIT,
        )
        categories, window = paginate(qs, page=page, limit=limit)
        return Response(
            {"categories": CategorySerializer(categories, many=True).data, "pagination": window.as_dict()}
        )

    @extend_schema(request=CategoryWriteSerializer, responses={201: CategorySerializer})
    def create(self, request, *args, **kwargs):
        serializer = CategoryWriteSerializer(data=request.data)
        if not serializer.is_valid():
            missing = {"name", "slug"} & set(serializer.errors)
            if missing:
                return Response({"detail": "Name and slug are required"}, status=status.HTTP_400_BAD_REQUEST)
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            category = catalog.create_category(serializer.to_changes())
        except DuplicateSlugError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except CategoryNotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)

        data = CategorySerializer(category).data
        log_admin_action(
            request,
            action=AdminLog.Action.CREATE,
            resource_type="Category",
            resource_id=category.id,
            identifier=category.name,
            after=data,
        )
        return Response(data, status=status.HTTP_201_CREATED)

    @extend_schema(request=CategoryWriteSerializer, responses={200: CategorySerializer})
    def partial_update(self, request, *args, **kwargs):
        category = self.get_object()
        serializer = CategoryWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        before = CategorySerializer(category).data
        try:
            category = catalog.update_category(category, serializer.to_changes())
        except DuplicateSlugError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except CategoryNotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidParentError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        after = CategorySerializer(category).data
        log_admin_action(
            request,
            action=AdminLog.Action.UPDATE,
            resource_type="Category",
            resource_id=category.id,
            identifier=category.name,
            before=before,
            after=after,
        )
        return Response(after)

    def destroy(self, request, *args, **kwargs):
        category = self.get_object()
        category_id, name = category.id, category.name

        try:
            catalog.delete_category(category)
        except CategoryInUseError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        log_admin_action(
            request,
            action=AdminLog.Action.DELETE,
            resource_type="Category",
            resource_id=category_id,
            identifier=name,
        )
        return Response({"message": "Category deleted successfully"})

    @extend_schema(request=None, responses={201: CategorySerializer})
    @action(detail=True, methods=["post"], url_path="duplicate")
    def duplicate(self, request, pk=None):
        try:
            copy = catalog.duplicate_category(self.get_object())
        except DuplicateSlugError:
            return Response(
                {"detail": "A category with this slug already exists. Please try again."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        data = CategorySerializer(copy).data
        log_admin_action(
            request,
            action=AdminLog.Action.CREATE,
            resource_type="Category",
            resource_id=copy.id,
            identifier=copy.name,
            after=data,
            metadata={"duplicatedFrom": str(pk)},
        )
        return Response(data, status=status.HTTP_201_CREATED)

    @extend_schema(request=CategoryBulkUpdateSerializer, responses={200: dict})
    @action(detail=False, methods=["patch", "delete"], url_path="bulk")
    def bulk(self, request):
        if request.method == "DELETE":
            return self._bulk_delete(request)

        serializer = CategoryBulkUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ids = [str(i) for i in serializer.validated_data["categoryIds"]]

        try:
            count = catalog.bulk_update_categories(ids, serializer.to_changes())
        except CategoryNotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        except (InvalidParentError, NoUpdatesError) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        log_admin_action(
            request,
            action=AdminLog.Action.BULK_OPERATION,
            resource_type="Category",
            description=f"Bulk updated {count} category/categories",
            details={"categoryIds": ids, "updates": request.data.get("updates")},
        )
        return Response({"message": "Categories updated successfully", "count": count})

    def _bulk_delete(self, request):
        serializer = CategoryBulkDeleteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ids = [str(i) for i in serializer.validated_data["categoryIds"]]

        try:
            count = catalog.bulk_delete_categories(ids)
        except CategoryInUseError as exc:
            return Response(
                {"detail": str(exc), "categories": exc.categories},
                status=status.HTTP_400_BAD_REQUEST,
            )

        log_admin_action(
            request,
            action=AdminLog.Action.BULK_OPERATION,
            resource_type="Category",
            description=f"Bulk deleted {count} category/categories",
            details={"categoryIds": ids},
        )
        return Response({"message": "Categories deleted successfully", "count": count})

    @extend_schema(
        parameters=[OpenApiParameter("format", str, OpenApiParameter.QUERY, required=False)],
        responses={200: bytes},
    )
    @action(detail=False, methods=["get"], url_path="export")
    def export(self, request):
        qs, error = self._filtered(request)
        if error is not None:
            return error

        rows = CategorySerializer(qs, many=True).data
        try:
            response = export_response(
                resource="categories",
                columns=EXPORT_COLUMNS,
                rows=rows,
                fmt=request.query_params.get("format"),
            )
        except ExportFormatError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        log_admin_action(
            request,
            action=AdminLog.Action.EXPORT,
            resource_type="Category",
            metadata={"count": len(rows)},
        )
        return response
