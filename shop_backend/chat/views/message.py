# chat/views/message.py

"""
CHAT VIEWSET

- GET  /api/chat/                  staff see every message, customers their own
- POST /api/chat/ {message}        customers only
- PUT  /api/chat/<id>/             staff mark read
- PUT  /api/chat/<id>/respond/     staff answer {adminResponse}
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from chat.models import ChatMessage
from chat.serializers import ChatMessageSerializer, ChatPostSerializer, ChatRespondSerializer
from chat.services import messages as chat_service
from chat.services.exceptions import EmptyMessageError
from common.throttles import UserWriteThrottle
from permissions.roles import CAP_CHAT_RESPOND, HasCapability, is_admin_user, user_has_capability

STAFF_ACTIONS = {"update", "respond"}


class ChatMessageViewSet(viewsets.GenericViewSet):
    serializer_class = ChatMessageSerializer
    queryset = ChatMessage.objects.select_related("user")
    required_capability = CAP_CHAT_RESPOND
    http_method_names = ["get", "post", "put", "head", "options"]

    def get_permissions(self):
        if self.action in STAFF_ACTIONS:
            return [IsAuthenticated(), HasCapability()]
        return [IsAuthenticated()]

    def get_throttles(self):
        if self.action == "create":
            return [UserWriteThrottle()]
        return super().get_throttles()

    def list(self, request):
        is_staff = user_has_capability(request.user, CAP_CHAT_RESPOND, request)
        qs = chat_service.messages_for(request.user, is_staff=is_staff)
        return Response(ChatMessageSerializer(qs, many=True).data)

    @extend_schema(request=ChatPostSerializer, responses={201: ChatMessageSerializer})
    def create(self, request):
        if is_admin_user(request.user):
            return Response(
                {"detail": "Admins cannot send messages through this endpoint"},
                status=status.HTTP_403_FORBIDDEN,
            )

        serializer = ChatPostSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            chat_message = chat_service.post_message(request.user, serializer.validated_data.get("message"))
        except EmptyMessageError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ChatMessageSerializer(chat_message).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={200: ChatMessageSerializer})
    def update(self, request, pk=None):
        chat_message = chat_service.mark_read(self.get_object())
        return Response(ChatMessageSerializer(chat_message).data)

    @extend_schema(request=ChatRespondSerializer, responses={200: ChatMessageSerializer})
    @action(detail=True, methods=["put"], url_path="respond")
    def respond(self, request, pk=None):
        chat_message = self.get_object()
        serializer = ChatRespondSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            chat_message = chat_service.respond(
                chat_message,
                serializer.validated_data.get("adminResponse"),
                responder=request.user,
            )
        except EmptyMessageError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ChatMessageSerializer(chat_message).data)
