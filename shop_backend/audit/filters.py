# audit/filters.py

from datetime import datetime, time, timedelta

import django_filters
from django.utils import timezone

from audit.models import AdminLog


def _day_start(value):
    return timezone.make_aware(datetime.combine(value, time.min))


class AdminLogFilter(django_filters.FilterSet):
    """
    ?userId=&actionType=&resourceType=&startDate=YYYY-MM-DD&endDate=YYYY-MM-DD&search=

    endDate is inclusive: everything before the start of the following day.
    """

    userId = django_filters.UUIDFilter(field_name="user_id")
    actionType = django_filters.ChoiceFilter(field_name="action_type", choices=AdminLog.Action.choices)
    resourceType = django_filters.CharFilter(field_name="resource_type")
    startDate = django_filters.DateFilter(method="filter_start_date")
    endDate = django_filters.DateFilter(method="filter_end_date")
    search = django_filters.CharFilter(field_name="description", lookup_expr="icontains")

    class Meta:
        model = AdminLog
        fields = []

    def filter_start_date(self, queryset, name, value):
        return queryset.filter(created_at__gte=_day_start(value))

    def filter_end_date(self, queryset, name, value):
        return queryset.filter(created_at__lt=_day_start(value + timedelta(days=1)))
