# users/views/banned_emails.py

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from audit.models import AdminLog
from audit.services.logger import log_admin_action
from permissions.roles import CAP_USERS_BAN, HasCapability
from users.models import BannedEmail
from users.serializers import BanEmailSerializer, BannedEmailSerializer
from users.services.accounts import ban_email, unban_email
from users.services.exceptions import AlreadyBannedError, NotBannedError


class BannedEmailView(APIView):
    """
    GET    /api/banned-emails/
    POST   /api/banned-emails/           {"email", "reason"}
    DELETE /api/banned-emails/?email=... (404 when not banned)
    """

    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_USERS_BAN

    @extend_schema(responses={200: BannedEmailSerializer(many=True)})
    def get(self, request):
        qs = BannedEmail.objects.select_related("banned_by").order_by("-created_at")
        return Response(BannedEmailSerializer(qs, many=True).data)

    @extend_schema(request=BanEmailSerializer, responses={201: BannedEmailSerializer})
    def post(self, request):
        serializer = BanEmailSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            banned = ban_email(
                email=serializer.validated_data["email"],
                reason=serializer.validated_data.get("reason", ""),
                banned_by=request.user,
            )
        except AlreadyBannedError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        log_admin_action(
            request,
            action=AdminLog.Action.CREATE,
            resource_type="BannedEmail",
            resource_id=banned.id,
            identifier=banned.email,
        )
        return Response(BannedEmailSerializer(banned).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        parameters=[OpenApiParameter("email", str, OpenApiParameter.QUERY, required=True)],
        responses={200: dict},
    )
    def delete(self, request):
        email = (request.query_params.get("email") or "").strip()
        if not email:
            return Response({"detail": "email query parameter is required"}, status=status.HTTP_400_BAD_REQUEST)

        try:
            unban_email(email)
        except NotBannedError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)

        log_admin_action(
            request,
            action=AdminLog.Action.DELETE,
            resource_type="BannedEmail",
            identifier=email.lower(),
        )
        return Response({"message": "Email unbanned successfully"})
