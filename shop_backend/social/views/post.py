# social/views/post.py

"""
SOCIAL MEDIA CALENDAR VIEWSET

Read (social.edit or social.review):
- GET /api/social-media/?month=YYYY-MM&status=&platform=&contentType=
- GET /api/social-media/<id>/
- GET /api/social-media/calendar/?month=YYYY-MM
- GET /api/social-media/pending-reviews/?mine=true

Write (social.edit):
- POST   /api/social-media/
- PUT / PATCH /api/social-media/<id>/     (both partial)
- DELETE /api/social-media/<id>/
- POST   /api/social-media/validate/      platform limits check

Setting status APPROVED / REJECTED needs social.review.
"""

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from audit.models import AdminLog
from audit.services.logger import log_admin_action
from permissions.roles import (
    CAP_SOCIAL_EDIT,
    CAP_SOCIAL_REVIEW,
    HasAnyCapability,
    HasCapability,
    user_has_capability,
)
from social.filters import SocialPostFilter
from social.models import SocialMediaPost
from social.serializers import (
    SocialMediaPostSerializer,
    SocialMediaPostWriteSerializer,
    SocialPostValidateSerializer,
)
from social.services import posts as post_service
from social.services.exceptions import InvalidMonthError, ReviewerNotFound
from social.services.validation import validate_post

READ_ACTIONS = {"list", "retrieve", "calendar", "pending_reviews", "update", "partial_update"}
REVIEW_STATUSES = {SocialMediaPost.Status.APPROVED, SocialMediaPost.Status.REJECTED}


def _error(exc, code):
    return Response({"detail": str(exc)}, status=code)


class SocialMediaPostViewSet(viewsets.ModelViewSet):
    serializer_class = SocialMediaPostSerializer
    required_capability = CAP_SOCIAL_EDIT
    required_any_capabilities = {CAP_SOCIAL_EDIT, CAP_SOCIAL_REVIEW}
    http_method_names = ["get", "post", "put", "patch", "delete", "head", "options"]

    def get_permissions(self):
        # updates are checked per payload in _check_update_capability
        if self.action in READ_ACTIONS:
            return [IsAuthenticated(), HasAnyCapability()]
        return [IsAuthenticated(), HasCapability()]

    def get_queryset(self):
        return SocialMediaPost.objects.order_by("scheduled_date")

    @extend_schema(
        parameters=[
            OpenApiParameter(name, str, OpenApiParameter.QUERY, required=False)
            for name in ("month", "status", "platform", "contentType")
        ],
        responses={200: SocialMediaPostSerializer(many=True)},
    )
    def list(self, request, *args, **kwargs):
        filterset = SocialPostFilter(request.query_params, queryset=self.get_queryset())
        if not filterset.is_valid():
            return Response(filterset.errors, status=status.HTTP_400_BAD_REQUEST)
        return Response(SocialMediaPostSerializer(filterset.qs, many=True).data)

    @extend_schema(
        parameters=[OpenApiParameter("month", str, OpenApiParameter.QUERY, required=False)],
        responses={200: dict},
    )
    @action(detail=False, methods=["get"], url_path="calendar")
    def calendar(self, request):
        try:
            year, month = post_service.parse_month(request.query_params.get("month"))
        except InvalidMonthError as exc:
            return _error(exc, status.HTTP_400_BAD_REQUEST)

        posts = post_service.posts_in_month(self.get_queryset(), year, month)
        days = post_service.group_by_day(posts)
        return Response(
            {
                "month": f"{year:04d}-{month:02d}",
                "days": {day: SocialMediaPostSerializer(items, many=True).data for day, items in days.items()},
            }
        )

    @extend_schema(
        parameters=[OpenApiParameter("mine", str, OpenApiParameter.QUERY, required=False)],
        responses={200: SocialMediaPostSerializer(many=True)},
    )
    @action(detail=False, methods=["get"], url_path="pending-reviews")
    def pending_reviews(self, request):
        mine = (request.query_params.get("mine") or "").strip().lower() == "true"
        qs = post_service.pending_reviews(request.user, mine=mine)
        return Response(SocialMediaPostSerializer(qs, many=True).data)

    @extend_schema(request=SocialPostValidateSerializer, responses={200: dict})
    @action(detail=False, methods=["post"], url_path="validate")
    def validate(self, request):
        serializer = SocialPostValidateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = validate_post(
            data["platform"],
            data["contentType"],
            caption=data["caption"],
            hashtags=data["hashtags"],
            images=[i for i in data["images"] if i.strip()],
            videos=[v for v in data["videos"] if v.strip()],
        )
        return Response(result.as_dict())

    # -----------------------------
    # Writes
    # -----------------------------
    @extend_schema(request=SocialMediaPostWriteSerializer, responses={201: SocialMediaPostSerializer})
    def create(self, request, *args, **kwargs):
        serializer = SocialMediaPostWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            post = post_service.create_post(request.user, serializer.to_changes())
        except ReviewerNotFound as exc:
            return _error(exc, status.HTTP_400_BAD_REQUEST)

        data = SocialMediaPostSerializer(post).data
        log_admin_action(
            request,
            action=AdminLog.Action.CREATE,
            resource_type="SocialMediaPost",
            resource_id=post.id,
            identifier=f"{post.platform} {post.content_type}",
            after=data,
        )
        return Response(data, status=status.HTTP_201_CREATED)

    def _check_update_capability(self, request, new_status):
        needed = CAP_SOCIAL_REVIEW if new_status in REVIEW_STATUSES else CAP_SOCIAL_EDIT
        if user_has_capability(request.user, needed, request):
            return None
        if needed == CAP_SOCIAL_REVIEW:
            message = "Only reviewers can approve or reject posts"
        else:
            message = "You do not have permission to perform this action."
        return Response({"detail": message}, status=status.HTTP_403_FORBIDDEN)

    @extend_schema(request=SocialMediaPostWriteSerializer, responses={200: SocialMediaPostSerializer})
    def update(self, request, *args, **kwargs):
        post = self.get_object()
        serializer = SocialMediaPostWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        changes = serializer.to_changes()

        denied = self._check_update_capability(request, changes.get("status"))
        if denied is not None:
            return denied

        before = SocialMediaPostSerializer(post).data
        try:
            post = post_service.update_post(post, request.user, changes)
        except ReviewerNotFound as exc:
            return _error(exc, status.HTTP_400_BAD_REQUEST)

        after = SocialMediaPostSerializer(post).data
        log_action = {
            SocialMediaPost.Status.APPROVED: AdminLog.Action.APPROVE,
            SocialMediaPost.Status.REJECTED: AdminLog.Action.REJECT,
        }.get(changes.get("status"), AdminLog.Action.UPDATE)
        log_admin_action(
            request,
            action=log_action,
            resource_type="SocialMediaPost",
            resource_id=post.id,
            identifier=f"{post.platform} {post.content_type}",
            before=before,
            after=after,
        )
        return Response(after)

    def partial_update(self, request, *args, **kwargs):
        return self.update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        post = self.get_object()
        post_id = post.id
        post_service.delete_post(post)

        log_admin_action(
            request,
            action=AdminLog.Action.DELETE,
            resource_type="SocialMediaPost",
            resource_id=post_id,
        )
        return Response({"success": True})
