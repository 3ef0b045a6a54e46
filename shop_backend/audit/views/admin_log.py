# audit/views/admin_log.py

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from audit.filters import AdminLogFilter
from audit.models import AdminLog
from audit.serializers import AdminLogSerializer
from common.pagination import page_params, paginate
from permissions.roles import CAP_AUDIT_VIEW, HasCapability


class AdminLogListView(APIView):
    """
    GET /api/admin/logs/

    Returns {"logs", "pagination", "filters": {"actionTypes", "resourceTypes"}}.
    """

    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_AUDIT_VIEW

    @extend_schema(
        parameters=[
            OpenApiParameter(name, str, OpenApiParameter.QUERY, required=False)
            for name in (
                "userId",
                "actionType",
                "resourceType",
                "startDate",
                "endDate",
                "search",
                "page",
                "limit",
            )
        ],
        responses={200: dict},
    )
    def get(self, request):
        filterset = AdminLogFilter(
            request.query_params,
            queryset=AdminLog.objects.select_related("user"),
        )
        if not filterset.is_valid():
            return Response(filterset.errors, status=400)

        page, limit = page_params(request.query_params, default_limit=50)
        logs, window = paginate(filterset.qs.order_by("-created_at"), page=page, limit=limit)

        resource_types = sorted(
            set(AdminLog.objects.values_list("resource_type", flat=True).distinct())
        )

        return Response(
            {
                "logs": AdminLogSerializer(logs, many=True).data,
                "pagination": window.as_dict(),
                "filters": {
                    "actionTypes": [value for value, _ in AdminLog.Action.choices],
                    "resourceTypes": resource_types,
                },
            }
        )
