# notifications/views/admin.py

"""
ADMIN NOTIFICATION CAMPAIGNS

- GET  /api/admin/notifications/?status=scheduled|active&page=&perPage=
- POST /api/admin/notifications/
- GET/PATCH/DELETE /api/admin/notifications/<id>/   (SYSTEM only)
"""

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from audit.models import AdminLog
from audit.services.logger import log_admin_action
from common.pagination import page_params, paginate
from notifications.serializers import (
    CampaignCreateSerializer,
    CampaignUpdateSerializer,
    SystemNotificationSerializer,
)
from notifications.services.campaigns import (
    campaign_queryset,
    create_campaign,
    get_system_notification,
    group_campaigns,
    update_system_notification,
)
from notifications.services.exceptions import (
    CampaignError,
    NotificationForbidden,
    NotificationNotFound,
)
from permissions.roles import CAP_NOTIFICATIONS_BROADCAST, HasCapability


class _BroadcastPermissionMixin:
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_NOTIFICATIONS_BROADCAST


class CampaignListCreateView(_BroadcastPermissionMixin, APIView):
    @extend_schema(
        parameters=[
            OpenApiParameter("status", str, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("page", int, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("perPage", int, OpenApiParameter.QUERY, required=False),
        ],
        responses={200: dict},
    )
    def get(self, request):
        page, per_page = page_params(
            request.query_params,
            default_limit=50,
            limit_param="perPage",
        )
        campaigns = group_campaigns(
            campaign_queryset(request.query_params.get("status") or None)
        )
        items, window = paginate(campaigns, page=page, limit=per_page)

        return Response(
            {
                "notifications": items,
                "pagination": window.as_dict(limit_key="perPage"),
            }
        )

    @extend_schema(request=CampaignCreateSerializer, responses={201: dict})
    def post(self, request):
        serializer = CampaignCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            count = create_campaign(
                title=data["title"],
                message=data["message"],
                link_url=data["linkUrl"],
                image=data.get("image") or "",
                target_audience=data["targetAudience"],
                user_ids=data.get("userIds"),
                is_scheduled=data["isScheduled"],
                scheduled_for=data.get("scheduledFor"),
            )
        except CampaignError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        log_admin_action(
            request,
            action=AdminLog.Action.CREATE,
            resource_type="Notification",
            identifier=data["title"],
            metadata={"recipients": count, "audience": data["targetAudience"]},
        )

        return Response(
            {"message": "Notification(s) created successfully", "count": count},
            status=status.HTTP_201_CREATED,
        )


class CampaignDetailView(_BroadcastPermissionMixin, APIView):
    def _load(self, pk):
        try:
            return get_system_notification(pk), None
        except NotificationNotFound as exc:
            return None, Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        except NotificationForbidden as exc:
            return None, Response({"detail": str(exc)}, status=status.HTTP_403_FORBIDDEN)

    @extend_schema(responses={200: SystemNotificationSerializer})
    def get(self, request, pk):
        notification, error = self._load(pk)
        if error:
            return error
        return Response(SystemNotificationSerializer(notification).data)

    @extend_schema(request=CampaignUpdateSerializer, responses={200: dict})
    def patch(self, request, pk):
        notification, error = self._load(pk)
        if error:
            return error

        serializer = CampaignUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        before = SystemNotificationSerializer(notification).data
        try:
            notification = update_system_notification(
                notification, serializer.to_model_changes()
            )
        except CampaignError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        after = SystemNotificationSerializer(notification).data
        log_admin_action(
            request,
            action=AdminLog.Action.UPDATE,
            resource_type="Notification",
            resource_id=notification.id,
            identifier=notification.title,
            before=before,
            after=after,
        )

        return Response(
            {"message": "Notification updated successfully", "notification": after}
        )

    def delete(self, request, pk):
        notification, error = self._load(pk)
        if error:
            return error

        title = notification.title
        notification_id = notification.id
        notification.delete()

        log_admin_action(
            request,
            action=AdminLog.Action.DELETE,
            resource_type="Notification",
            resource_id=notification_id,
            identifier=title,
        )
        return Response({"message": "Notification deleted successfully"})
