# products/filters.py

import django_filters
from django.db.models import Q

from products.models import Category, Product

PRODUCT_SORTS = {
    "price-asc": ("price", "-created_at"),
    "price-desc": ("-price", "-created_at"),
    "name-asc": ("name",),
    "name-desc": ("-name",),
    "newest": ("-created_at",),
    "oldest": ("created_at",),
}
DEFAULT_PRODUCT_SORT = "newest"


class ProductFilter(django_filters.FilterSet):
    """
    ?categoryId=&search=&featured=true&minPrice=&maxPrice=&sortBy=

    Unknown sortBy values fall back to newest first.
    """

    categoryId = django_filters.UUIDFilter(field_name="category_id")
    search = django_filters.CharFilter(method="filter_search")
    featured = django_filters.CharFilter(method="filter_featured")
    minPrice = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    maxPrice = django_filters.NumberFilter(field_name="price", lookup_expr="lte")
    sortBy = django_filters.CharFilter(method="filter_sort")

    class Meta:
        model = Product
        fields = []

    def filter_search(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(Q(name__icontains=value) | Q(description__icontains=value))

    def filter_featured(self, queryset, name, value):
        # only "true" narrows the list; anything else is ignored
        if value.strip().lower() == "true":
            return queryset.filter(featured=True)
        return queryset

    def filter_sort(self, queryset, name, value):
        return queryset.order_by(*PRODUCT_SORTS.get(value, PRODUCT_SORTS[DEFAULT_PRODUCT_SORT]))


class CategoryFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(method="filter_search")
    parentId = django_filters.UUIDFilter(field_name="parent_id")
    topLevel = django_filters.BooleanFilter(field_name="parent", lookup_expr="isnull")

    class Meta:
        model = Category
        fields = []

    def filter_search(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(Q(name__icontains=value) | Q(slug__icontains=value))
