# users/views/admin_users.py

"""
ADMIN USER MANAGEMENT

- GET    /api/users/?role=admin|customer&search=&page=&limit=
- POST   /api/users/
- GET    /api/users/<id>/
- PATCH  /api/users/<id>/
- DELETE /api/users/<id>/        (never yourself)
- GET    /api/users/export/?format=csv|json
"""

from django.contrib.auth import get_user_model
from django.db.models import Q
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from audit.models import AdminLog
from audit.services.logger import log_admin_action
from common.exports import ExportFormatError, export_response
from common.pagination import page_params, paginate, wants_pagination
from permissions.roles import CAP_USERS_MANAGE, ROLE_ADMIN, HasCapability
from users.serializers import (
    AdminUserCreateSerializer,
    AdminUserUpdateSerializer,
    UserSerializer,
)
from users.services.accounts import admin_update_user, delete_user
from users.services.exceptions import EmailTakenError, SelfDeletionError
from users.models import normalize_email_address

User = get_user_model()

EXPORT_COLUMNS = [
    ("id", "ID"),
    ("name", "Name"),
    ("email", "Email"),
    ("role", "Role"),
    ("userType", "User Type"),
    ("isActive", "Active"),
    ("lastLogin", "Last Login"),
    ("createdAt", "Created At"),
]


class UserAdminViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = UserSerializer
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_USERS_MANAGE

    def get_queryset(self):
        qs = User.objects.all().order_by("-created_at")

        role = (self.request.query_params.get("role") or "").strip().lower()
        if role:
            qs = qs.filter(role=role)

        search = (self.request.query_params.get("search") or "").strip()
        if search:
            qs = qs.filter(Q(name__icontains=search) | Q(email__icontains=search))

        return qs

    @extend_schema(
        parameters=[
            OpenApiParameter("role", str, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("search", str, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("page", int, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("limit", int, OpenApiParameter.QUERY, required=False),
        ],
    )
    def list(self, request, *args, **kwargs):
        qs = self.get_queryset()

        if not wants_pagination(request.query_params):
            return Response(UserSerializer(qs, many=True).data)

        page, limit = page_params(request.query_params, default_limit=20)
        users, window = paginate(qs, page=page, limit=limit)
        return Response(
            {"users": UserSerializer(users, many=True).data, "pagination": window.as_dict()}
        )

    @extend_schema(request=AdminUserCreateSerializer, responses={201: UserSerializer})
    def create(self, request):
        serializer = AdminUserCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        email = normalize_email_address(data["email"])
        if User.objects.filter(email=email).exists():
            return Response({"detail": "User already exists"}, status=status.HTTP_400_BAD_REQUEST)

        user = User.objects.create_user(
            email=email,
            password=data["password"],
            name=data.get("name", "").strip(),
            role=data["role"],
            permissions=data.get("permissions") or {},
            is_staff=data["role"] == ROLE_ADMIN,
        )

        log_admin_action(
            request,
            action=AdminLog.Action.CREATE,
            resource_type="User",
            resource_id=user.id,
            identifier=user.email,
            after=UserSerializer(user).data,
        )
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=AdminUserUpdateSerializer, responses={200: UserSerializer})
    def partial_update(self, request, pk=None):
        user = self.get_object()
        serializer = AdminUserUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        before = UserSerializer(user).data
        try:
            user = admin_update_user(user, serializer.to_changes())
        except EmailTakenError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        after = UserSerializer(user).data
        log_admin_action(
            request,
            action=AdminLog.Action.UPDATE,
            resource_type="User",
            resource_id=user.id,
            identifier=user.email,
            before=before,
            after=after,
        )
        return Response(after)

    def destroy(self, request, pk=None):
        user = self.get_object()
        user_id, email = user.id, user.email

        try:
            delete_user(actor=request.user, user=user)
        except SelfDeletionError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        log_admin_action(
            request,
            action=AdminLog.Action.DELETE,
            resource_type="User",
            resource_id=user_id,
            identifier=email,
        )
        return Response({"message": "User deleted successfully"})

    @extend_schema(
        parameters=[OpenApiParameter("format", str, OpenApiParameter.QUERY, required=False)],
        responses={200: bytes},
    )
    @action(detail=False, methods=["get"], url_path="export")
    def export(self, request):
        rows = UserSerializer(self.get_queryset(), many=True).data
        try:
            response = export_response(
                resource="users",
                columns=EXPORT_COLUMNS,
                rows=rows,
                fmt=request.query_params.get("format"),
            )
        except ExportFormatError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        log_admin_action(
            request,
            action=AdminLog.Action.EXPORT,
            resource_type="User",
            metadata={"count": len(rows)},
        )
        return response
