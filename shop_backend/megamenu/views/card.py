# megamenu/views/card.py

"""
MEGA MENU CARD VIEWSET

Public (AllowAny, throttled, cached):
- GET /api/mega-menu-cards/?menuType=SHOP|ABOUT&includeInactive=true

Menu editors (megamenu.edit):
- POST   /api/mega-menu-cards/        multipart upsert by (menuType, position)
- PATCH  /api/mega-menu-cards/<id>/   {imageUrl, linkUrl, isActive}
- DELETE /api/mega-menu-cards/<id>/

includeInactive only applies to editors; the storefront always gets
active cards.
"""

from django.http import Http404
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.exceptions import NotFound
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from audit.models import AdminLog
from audit.services.logger import log_admin_action
from common.throttles import PublicCatalogThrottle
from megamenu.models import MegaMenuCard
from megamenu.serializers import (
    MegaMenuCardSerializer,
    MegaMenuCardUpdateSerializer,
    MegaMenuCardUpsertSerializer,
)
from megamenu.services import cards as card_service
from megamenu.services.exceptions import InvalidCardError
from permissions.roles import CAP_MEGAMENU_EDIT, HasCapability, user_has_capability


class MegaMenuCardViewSet(viewsets.GenericViewSet):
    serializer_class = MegaMenuCardSerializer
    queryset = MegaMenuCard.objects.all()
    required_capability = CAP_MEGAMENU_EDIT
    parser_classes = [MultiPartParser, FormParser, JSONParser]
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]

    def get_permissions(self):
        if self.action == "list":
            return [AllowAny()]
        return [IsAuthenticated(), HasCapability()]

    def get_throttles(self):
        if self.action == "list":
            return [PublicCatalogThrottle()]
        return super().get_throttles()

    def get_object(self):
        try:
            return super().get_object()
        except Http404:
            raise NotFound("Card not found")

    @extend_schema(
        parameters=[
            OpenApiParameter("menuType", str, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("includeInactive", bool, OpenApiParameter.QUERY, required=False),
        ],
        responses={200: dict},
    )
    def list(self, request):
        include_inactive = (
            request.query_params.get("includeInactive") == "true"
            and user_has_capability(request.user, CAP_MEGAMENU_EDIT, request)
        )
        try:
            cards = card_service.list_cards(
                menu_type=request.query_params.get("menuType") or None,
                include_inactive=include_inactive,
            )
        except InvalidCardError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response({"cards": cards})

    @extend_schema(request=MegaMenuCardUpsertSerializer, responses={201: dict})
    def create(self, request):
        serializer = MegaMenuCardUpsertSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        if serializer.missing_required():
            return Response(
                {"detail": "menuType, position, and linkUrl are required"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        data = serializer.validated_data
        try:
            card, created = card_service.upsert_card(
                menu_type=data["menuType"],
                position=data["position"],
                link_url=data["linkUrl"],
                is_active=data["isActive"],
                upload=request.FILES.get("file"),
                existing_image_url=data.get("existingImageUrl") or "",
            )
        except InvalidCardError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        payload = MegaMenuCardSerializer(card).data
        log_admin_action(
            request,
            action=AdminLog.Action.CREATE if created else AdminLog.Action.UPDATE,
            resource_type="MegaMenuCard",
            resource_id=card.id,
            identifier=str(card),
            after=payload,
        )
        return Response({"card": payload}, status=status.HTTP_201_CREATED)

    @extend_schema(request=MegaMenuCardUpdateSerializer, responses={200: dict})
    def partial_update(self, request, pk=None):
        card = self.get_object()
        serializer = MegaMenuCardUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        before = MegaMenuCardSerializer(card).data
        card = card_service.update_card(card, serializer.to_changes())
        after = MegaMenuCardSerializer(card).data

        log_admin_action(
            request,
            action=AdminLog.Action.UPDATE,
            resource_type="MegaMenuCard",
            resource_id=card.id,
            identifier=str(card),
            before=before,
            after=after,
        )
        return Response({"card": after})

    def destroy(self, request, pk=None):
        card = self.get_object()
        card_id, label = card.id, str(card)

        card_service.delete_card(card)

        log_admin_action(
            request,
            action=AdminLog.Action.DELETE,
            resource_type="MegaMenuCard",
            resource_id=card_id,
            identifier=label,
        )
        return Response({"success": True})
