# salons/views/salon.py

"""
SALON VIEWSET

Public (AllowAny, throttled):
- GET /api/salons/?search=&city=            active + approved only
- GET /api/salons/<id>/                     public rows, or your own

Owners (authenticated):
- POST   /api/salons/                       one listing per account
- PATCH  /api/salons/<id>/                  own listing only
- DELETE /api/salons/<id>/                  own listing only
- GET    /api/salons/my-salon/

Staff (salons.review / salons.manage):
- POST   /api/salons/<id>/review/  {action: approve|reject, rejectionReason}
- PATCH  /api/salons/bulk/         {salonIds, action, rejectionReason}
- DELETE /api/salons/bulk/         {salonIds}
- GET    /api/salons/export/?format=csv|json

Staff see every salon (any status) plus the owner summary.
"""

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from audit.models import AdminLog
from audit.services.logger import log_admin_action
from common.exports import ExportFormatError, export_response
from common.throttles import PublicCatalogThrottle, UserWriteThrottle
from permissions.roles import (
    CAP_SALONS_MANAGE,
    CAP_SALONS_REVIEW,
    HasCapability,
    user_has_capability,
)
from salons.filters import SalonFilter
from salons.models import Salon
from salons.serializers import (
    REQUIRED_FIELDS,
    SalonBulkActionSerializer,
    SalonBulkDeleteSerializer,
    SalonReviewSerializer,
    SalonSerializer,
    SalonWriteSerializer,
)
from salons.services import directory
from salons.services import review as review_service
from salons.services.exceptions import (
    InvalidReviewError,
    SalonAlreadyExistsError,
    SalonForbidden,
)

PUBLIC_ACTIONS = {"list", "retrieve"}
OWNER_ACTIONS = {"create", "partial_update", "destroy", "my_salon"}

EXPORT_COLUMNS = [
    ("id", "ID"),
    ("name", "Name"),
    ("address", "Address"),
    ("city", "City"),
    ("postalCode", "Postal Code"),
    ("phone", "Phone"),
    ("email", "Email"),
    ("website", "Website"),
    ("status", "Status"),
    ("isActive", "Active"),
    ("isBioDiamond", "BIO Diamond"),
    ("ownerEmail", "Owner Email"),
    ("createdAt", "Created At"),
]

_BULK_LOG_ACTIONS = {
    review_service.APPROVE: AdminLog.Action.APPROVE,
    review_service.REJECT: AdminLog.Action.REJECT,
    review_service.ACTIVATE: AdminLog.Action.ACTIVATE,
    review_service.DEACTIVATE: AdminLog.Action.DEACTIVATE,
}


def _error(exc, code):
    return Response({"detail": str(exc)}, status=code)


class SalonViewSet(viewsets.ModelViewSet):
    serializer_class = SalonSerializer
    required_capability = CAP_SALONS_REVIEW
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]

    def get_permissions(self):
        if self.action in PUBLIC_ACTIONS:
            return [AllowAny()]
        if self.action in OWNER_ACTIONS:
            return [IsAuthenticated()]
        if self.action == "export" or (self.action == "bulk" and self.request.method == "DELETE"):
            self.required_capability = CAP_SALONS_MANAGE
        return [IsAuthenticated(), HasCapability()]

    def get_throttles(self):
        if self.action in PUBLIC_ACTIONS:
            return [PublicCatalogThrottle()]
        if self.action == "create":
            return [UserWriteThrottle()]
        return super().get_throttles()

    def is_staff_request(self) -> bool:
        return user_has_capability(self.request.user, CAP_SALONS_MANAGE, self.request)

    def get_queryset(self):
        qs = Salon.objects.select_related("user")
        if self.action == "list" and not self.is_staff_request():
            qs = qs.public()
        return qs.directory_order()

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context["include_owner"] = self.is_staff_request()
        return context

    def _serialize(self, salon):
        return SalonSerializer(salon, context=self.get_serializer_context()).data

    # -----------------------------
    # Public reads
    # -----------------------------
    @extend_schema(
        parameters=[
            OpenApiParameter(name, str, OpenApiParameter.QUERY, required=False)
            for name in ("search", "city", "status")
        ],
        responses={200: SalonSerializer(many=True)},
    )
    def list(self, request, *args, **kwargs):
        filterset = SalonFilter(request.query_params, queryset=self.get_queryset())
        if not filterset.is_valid():
            return Response(filterset.errors, status=status.HTTP_400_BAD_REQUEST)
        return Response(
            SalonSerializer(filterset.qs, many=True, context=self.get_serializer_context()).data
        )

    def retrieve(self, request, *args, **kwargs):
        salon = self.get_object()
        if not directory.visible_to(salon, request.user, is_admin=self.is_staff_request()):
            raise NotFound("Salon not found")
        return Response(self._serialize(salon))

    # -----------------------------
    # Owner writes
    # -----------------------------
    @extend_schema(request=SalonWriteSerializer, responses={201: SalonSerializer})
    def create(self, request, *args, **kwargs):
        serializer = SalonWriteSerializer(data=request.data)
        if not serializer.is_valid():
            if set(REQUIRED_FIELDS) & set(serializer.errors):
                return Response(
                    {"detail": "Name, address, and city are required fields"},
                    status=status.HTTP_400_BAD_REQUEST,
                )
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        is_staff = self.is_staff_request()
        try:
            salon = directory.create_salon(request.user, serializer.to_changes(), is_admin=is_staff)
        except SalonAlreadyExistsError as exc:
            return _error(exc, status.HTTP_400_BAD_REQUEST)

        data = self._serialize(salon)
        if is_staff:
            log_admin_action(
                request,
                action=AdminLog.Action.CREATE,
                resource_type="Salon",
                resource_id=salon.id,
                identifier=salon.name,
                after=data,
            )
        return Response(data, status=status.HTTP_201_CREATED)

    @extend_schema(request=SalonWriteSerializer, responses={200: SalonSerializer})
    def partial_update(self, request, *args, **kwargs):
        salon = self.get_object()
        serializer = SalonWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        is_staff = self.is_staff_request()
        before = self._serialize(salon)
        try:
            salon = directory.update_salon(salon, request.user, serializer.to_changes(), is_admin=is_staff)
        except SalonForbidden as exc:
            return _error(exc, status.HTTP_403_FORBIDDEN)

        after = self._serialize(salon)
        if is_staff:
            log_admin_action(
                request,
                action=AdminLog.Action.UPDATE,
                resource_type="Salon",
                resource_id=salon.id,
                identifier=salon.name,
                before=before,
                after=after,
            )
        return Response(after)

    def destroy(self, request, *args, **kwargs):
        salon = self.get_object()
        salon_id, name = salon.id, salon.name

        is_staff = self.is_staff_request()
        try:
            directory.delete_salon(salon, request.user, is_admin=is_staff)
        except SalonForbidden:
            return Response(
                {"detail": "Unauthorized - You can only delete your own salon"},
                status=status.HTTP_403_FORBIDDEN,
            )

        if is_staff:
            log_admin_action(
                request,
                action=AdminLog.Action.DELETE,
                resource_type="Salon",
                resource_id=salon_id,
                identifier=name,
            )
        return Response({"message": "Salon deleted successfully"})

    @extend_schema(responses={200: SalonSerializer})
    @action(detail=False, methods=["get"], url_path="my-salon")
    def my_salon(self, request):
        salon = directory.salon_for_user(request.user)
        if salon is None:
            return Response({"detail": "Salon not found"}, status=status.HTTP_404_NOT_FOUND)
        return Response(self._serialize(salon))

    # -----------------------------
    # Staff review
    # -----------------------------
    @extend_schema(request=SalonReviewSerializer, responses={200: dict})
    @action(detail=True, methods=["post"], url_path="review")
    def review(self, request, pk=None):
        salon = self.get_object()
        serializer = SalonReviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        verb = serializer.validated_data["action"]

        try:
            salon = review_service.review_salon(
                salon,
                request.user,
                action=verb,
                reason=serializer.validated_data.get("rejectionReason"),
            )
        except InvalidReviewError as exc:
            return _error(exc, status.HTTP_400_BAD_REQUEST)

        log_admin_action(
            request,
            action=AdminLog.Action.APPROVE if verb == review_service.APPROVE else AdminLog.Action.REJECT,
            resource_type="Salon",
            resource_id=salon.id,
            identifier=salon.name,
            details={"rejectionReason": salon.rejection_reason},
        )
        past = "approved" if verb == review_service.APPROVE else "rejected"
        return Response(
            {"success": True, "salon": self._serialize(salon), "message": f"Salon {past} successfully"}
        )

    @extend_schema(request=SalonBulkActionSerializer, responses={200: dict})
    @action(detail=False, methods=["patch", "delete"], url_path="bulk")
    def bulk(self, request):
        if request.method == "DELETE":
            return self._bulk_delete(request)

        serializer = SalonBulkActionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ids = [str(i) for i in serializer.validated_data["salonIds"]]
        verb = serializer.validated_data["action"]

        try:
            count = review_service.bulk_salon_action(
                ids,
                request.user,
                action=verb,
                reason=serializer.validated_data.get("rejectionReason"),
            )
        except InvalidReviewError as exc:
            return _error(exc, status.HTTP_400_BAD_REQUEST)

        log_admin_action(
            request,
            action=AdminLog.Action.BULK_OPERATION,
            resource_type="Salon",
            description=f"Bulk {verb} on {count} salon(s)",
            details={"salonIds": ids, "action": verb},
            metadata={"operation": _BULK_LOG_ACTIONS[verb]},
        )
        return Response({"message": "Salons updated successfully", "count": count})

    def _bulk_delete(self, request):
        serializer = SalonBulkDeleteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ids = [str(i) for i in serializer.validated_data["salonIds"]]

        count = directory.bulk_delete_salons(ids)

        log_admin_action(
            request,
            action=AdminLog.Action.BULK_OPERATION,
            resource_type="Salon",
            description=f"Bulk deleted {count} salon(s)",
            details={"salonIds": ids},
        )
        return Response({"message": "Salons deleted successfully", "count": count})

    @extend_schema(
        parameters=[OpenApiParameter("format", str, OpenApiParameter.QUERY, required=False)],
        responses={200: bytes},
    )
    @action(detail=False, methods=["get"], url_path="export")
    def export(self, request):
        filterset = SalonFilter(request.query_params, queryset=self.get_queryset())
        if not filterset.is_valid():
            return Response(filterset.errors, status=status.HTTP_400_BAD_REQUEST)

        rows = []
        for salon in filterset.qs:
            row = SalonSerializer(salon).data
            row["ownerEmail"] = salon.user.email if salon.user else ""
            rows.append(row)

        try:
            response = export_response(
                resource="salons",
                columns=EXPORT_COLUMNS,
                rows=rows,
                fmt=request.query_params.get("format"),
            )
        except ExportFormatError as exc:
            return _error(exc, status.HTTP_400_BAD_REQUEST)

        log_admin_action(
            request,
            action=AdminLog.Action.EXPORT,
            resource_type="Salon",
            metadata={"count": len(rows)},
        )
        return response
