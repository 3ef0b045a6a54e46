# salons/filters.py

import django_filters
from django.db.models import Q

from salons.models import Salon


class SalonFilter(django_filters.FilterSet):
    """
    ?search=&city=&status=

    status only matters for admins; everyone else already gets approved rows.
    """

    search = django_filters.CharFilter(method="filter_search")
    city = django_filters.CharFilter(field_name="city", lookup_expr="icontains")
    status = django_filters.ChoiceFilter(choices=Salon.Status.choices)

    class Meta:
        model = Salon
        fields = []

    def filter_search(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(name__icontains=value) | Q(address__icontains=value) | Q(city__icontains=value)
        )
