# notifications/views/feed.py

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from notifications.serializers import FeedQuerySerializer, FeedUpdateSerializer
from notifications.services.dispatch import (
    feed_queryset,
    format_for_feed,
    mark_all_as_read,
    set_read_state,
)
from notifications.services.exceptions import NotificationForbidden, NotificationNotFound


class NotificationFeedView(APIView):
    """
    GET   /api/notifications/?unreadOnly=true&limit=50
    PATCH /api/notifications/  {"markAllAsRead": true} | {"notificationId", "read"}
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        parameters=[
            OpenApiParameter("unreadOnly", bool, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("limit", int, OpenApiParameter.QUERY, required=False),
        ],
        responses={200: OpenApiResponse(description="Formatted notification list")},
    )
    def get(self, request):
        query = FeedQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        qs = feed_queryset(
            request.user,
            unread_only=query.validated_data["unreadOnly"],
        )[: query.validated_data["limit"]]

        return Response([format_for_feed(n) for n in qs])

    @extend_schema(request=FeedUpdateSerializer, responses={200: dict})
    def patch(self, request):
        serializer = FeedUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        if data.get("markAllAsRead"):
            updated = mark_all_as_read(request.user)
            return Response(
                {"message": "All notifications marked as read", "count": updated}
            )

        try:
            set_read_state(
                request.user,
                notification_id=data["notificationId"],
                read=data["read"],
            )
        except NotificationNotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        except NotificationForbidden as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_403_FORBIDDEN)

        return Response({"message": "Notification updated"})
