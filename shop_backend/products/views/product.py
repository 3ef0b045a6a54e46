# products/views/product.py

"""
PRODUCT VIEWSET

Public (AllowAny, throttled):
- GET /api/products/?categoryId=&search=&featured=&minPrice=&maxPrice=&sortBy=&page=&limit=
- GET /api/products/<id>/
- GET /api/products/<id>/related/?limit=4

Admin (catalog.edit):
- POST / PATCH / DELETE /api/products/[<id>/]
- POST   /api/products/<id>/duplicate/
- PATCH  /api/products/bulk/   {productIds, updates}
- DELETE /api/products/bulk/   {productIds}

Admin (catalog.export):
- GET /api/products/export/?format=csv|json

Without page/limit the list is a bare array (storefront widgets);
with either it is {"products", "pagination"}.
"""

from django.core.exceptions import ValidationError as DjangoValidationError
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from audit.models import AdminLog
from audit.services.logger import log_admin_action
from common.exports import ExportFormatError, export_response
from common.pagination import page_params, paginate, parse_positive_int, wants_pagination
from common.throttles import PublicCatalogThrottle
from permissions.roles import CAP_CATALOG_EDIT, CAP_CATALOG_EXPORT, HasCapability
from products.filters import ProductFilter
from products.models import Product
from products.serializers import (
    ProductBulkDeleteSerializer,
    ProductBulkUpdateSerializer,
    ProductSerializer,
    ProductWriteSerializer,
)
from products.services import catalog
from products.services.exceptions import (
    CategoryNotFound,
    InvalidSubcategoryError,
    NoUpdatesError,
)

PUBLIC_ACTIONS = {"list", "retrieve", "related"}
PRODUCTS_DEFAULT_LIMIT = 12

EXPORT_COLUMNS = [
    ("id", "ID"),
    ("name", "Name"),
    ("description", "Description"),
    ("price", "Price"),
    ("salePrice", "Sale Price"),
    ("discountPercentage", "Discount %"),
    ("categoryName", "Category"),
    ("subcategoryNames", "Subcategories"),
    ("featured", "Featured"),
    ("image", "Image"),
    ("images", "Images"),
    ("showcasingSections", "Showcasing Sections"),
    ("createdAt", "Created At"),
]


def _export_row(product: Product) -> dict:
    row = ProductSerializer(product).data
    row["categoryName"] = product.category.name if product.category else ""
    row["subcategoryNames"] = [c.name for c in product.subcategories.all()]
    return row


def _error(exc, code):
    return Response({"detail": str(exc)}, status=code)


class ProductViewSet(viewsets.ModelViewSet):
    serializer_class = ProductSerializer
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
        return Product.objects.select_related("category").prefetch_related("subcategories")

    def _filtered(self, request):
        filterset = ProductFilter(request.query_params, queryset=self.get_queryset())
        if not filterset.is_valid():
            return None, Response(filterset.errors, status=status.HTTP_400_BAD_REQUEST)
        return filterset.qs, None

    # -----------------------------
    # Public reads
    # -----------------------------
    @extend_schema(
        parameters=[
            OpenApiParameter(name, str, OpenApiParameter.QUERY, required=False)
            for name in ("categoryId", "search", "featured", "minPrice", "maxPrice", "sortBy", "page", "limit")
        ],
        responses={200: ProductSerializer(many=True)},
    )
    def list(self, request, *args, **kwargs):
        qs, error = self._filtered(request)
        if error is not None:
            return error

        if not wants_pagination(request.query_params):
            return Response(ProductSerializer(qs, many=True).data)

        page, limit = page_params(request.query_params, default_limit=PRODUCTS_DEFAULT_LIMIT)
        products, window = paginate(qs, page=page, limit=limit)
        return Response(
            {"products": ProductSerializer(products, many=True).data, "pagination": window.as_dict()}
        )

    @extend_schema(
        parameters=[OpenApiParameter("limit", int, OpenApiParameter.QUERY, required=False)],
        responses={200: ProductSerializer(many=True)},
    )
    @action(detail=True, methods=["get"], url_path="related")
    def related(self, request, pk=None):
        product = self.get_object()
        limit = parse_positive_int(
            request.query_params.get("limit"),
            default=catalog.RELATED_DEFAULT_LIMIT,
            maximum=24,
        )
        return Response(ProductSerializer(catalog.related_products(product, limit=limit), many=True).data)

    # -----------------------------
    # Admin writes
    # -----------------------------
    @extend_schema(request=ProductWriteSerializer, responses={201: ProductSerializer})
    def create(self, request, *args, **kwargs):
        serializer = ProductWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            product = catalog.create_product(serializer.to_changes())
        except CategoryNotFound as exc:
            return _error(exc, status.HTTP_404_NOT_FOUND)
        except InvalidSubcategoryError as exc:
            return _error(exc, status.HTTP_400_BAD_REQUEST)
        except DjangoValidationError as exc:
            return Response(exc.message_dict, status=status.HTTP_400_BAD_REQUEST)

        data = ProductSerializer(product).data
        log_admin_action(
            request,
            action=AdminLog.Action.CREATE,
            resource_type="Product",
            resource_id=product.id,
            identifier=product.name,
            after=data,
        )
        return Response(data, status=status.HTTP_201_CREATED)

    @extend_schema(request=ProductWriteSerializer, responses={200: ProductSerializer})
    def partial_update(self, request, *args, **kwargs):
        product = self.get_object()
        serializer = ProductWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        before = ProductSerializer(product).data
        try:
            product = catalog.update_product(product, serializer.to_changes())
        except CategoryNotFound as exc:
            return _error(exc, status.HTTP_404_NOT_FOUND)
        except InvalidSubcategoryError as exc:
            return _error(exc, status.HTTP_400_BAD_REQUEST)
        except DjangoValidationError as exc:
            return Response(exc.message_dict, status=status.HTTP_400_BAD_REQUEST)

        after = ProductSerializer(product).data
        log_admin_action(
            request,
            action=AdminLog.Action.UPDATE,
            resource_type="Product",
            resource_id=product.id,
            identifier=product.name,
            before=before,
            after=after,
        )
        return Response(after)

    def destroy(self, request, *args, **kwargs):
        product = self.get_object()
        product_id, name = product.id, product.name
        product.delete()

        log_admin_action(
            request,
            action=AdminLog.Action.DELETE,
            resource_type="Product",
            resource_id=product_id,
            identifier=name,
        )
        return Response({"message": "Product deleted"})

    @extend_schema(request=None, responses={201: ProductSerializer})
    @action(detail=True, methods=["post"], url_path="duplicate")
    def duplicate(self, request, pk=None):
        copy = catalog.duplicate_product(self.get_object())
        data = ProductSerializer(copy).data

        log_admin_action(
            request,
            action=AdminLog.Action.CREATE,
            resource_type="Product",
            resource_id=copy.id,
            identifier=copy.name,
            after=data,
            metadata={"duplicatedFrom": str(pk)},
        )
        return Response(data, status=status.HTTP_201_CREATED)

    @extend_schema(request=ProductBulkUpdateSerializer, responses={200: dict})
    @action(detail=False, methods=["patch", "delete"], url_path="bulk")
    def bulk(self, request):
        if request.method == "DELETE":
            return self._bulk_delete(request)

        serializer = ProductBulkUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ids = [str(i) for i in serializer.validated_data["productIds"]]
        changes = serializer.to_changes()

        try:
            count = catalog.bulk_update_products(ids, changes)
        except CategoryNotFound as exc:
            return _error(exc, status.HTTP_404_NOT_FOUND)
        except (InvalidSubcategoryError, NoUpdatesError) as exc:
            return _error(exc, status.HTTP_400_BAD_REQUEST)

        log_admin_action(
            request,
            action=AdminLog.Action.BULK_OPERATION,
            resource_type="Product",
            description=f"Bulk updated {count} product(s)",
            details={"productIds": ids, "updates": request.data.get("updates")},
        )
        return Response({"message": "Products updated successfully", "count": count})

    def _bulk_delete(self, request):
        serializer = ProductBulkDeleteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ids = [str(i) for i in serializer.validated_data["productIds"]]

        count = catalog.bulk_delete_products(ids)

        log_admin_action(
            request,
            action=AdminLog.Action.BULK_OPERATION,
            resource_type="Product",
            description=f"Bulk deleted {count} product(s)",
            details={"productIds": ids},
        )
        return Response({"message": "Products deleted successfully", "count": count})

    @extend_schema(
        parameters=[OpenApiParameter("format", str, OpenApiParameter.QUERY, required=False)],
        responses={200: bytes},
    )
    @action(detail=False, methods=["get"], url_path="export")
    def export(self, request):
        qs, error = self._filtered(request)
        if error is not None:
            return error

        rows = [_export_row(p) for p in qs]
        try:
            response = export_response(
                resource="products",
                columns=EXPORT_COLUMNS,
                rows=rows,
                fmt=request.query_params.get("format"),
            )
        except ExportFormatError as exc:
            return _error(exc, status.HTTP_400_BAD_REQUEST)

        log_admin_action(
            request,
            action=AdminLog.Action.EXPORT,
            resource_type="Product",
            metadata={"count": len(rows)},
        )
        return response
