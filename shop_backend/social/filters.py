# social/filters.py

import django_filters
from django.core.validators import RegexValidator

from social.models import SocialMediaPost
from social.services.posts import parse_month, posts_in_month

MONTH_VALIDATOR = RegexValidator(r"^\d{4}-(0[1-9]|1[0-2])$", "month must be YYYY-MM")


class SocialPostFilter(django_filters.FilterSet):
    """
    ?month=YYYY-MM&status=&platform=

    month covers the whole calendar month in the project time zone.
    """

    month = django_filters.CharFilter(method="filter_month", validators=[MONTH_VALIDATOR])
    status = django_filters.ChoiceFilter(choices=SocialMediaPost.Status.choices)
    platform = django_filters.ChoiceFilter(choices=SocialMediaPost.Platform.choices)
    contentType = django_filters.ChoiceFilter(
        field_name="content_type", choices=SocialMediaPost.ContentType.choices
    )

    class Meta:
        model = SocialMediaPost
        fields = []

    def filter_month(self, queryset, name, value):
        year, month = parse_month(value)
        return posts_in_month(queryset, year, month)
