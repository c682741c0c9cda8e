# production/filters.py

import django_filters

from production.models import DailyReport


class DailyReportFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=DailyReport.STATUS_CHOICES)
    user = django_filters.UUIDFilter(field_name="user_id")
    date_from = django_filters.DateFilter(field_name="report_date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="report_date", lookup_expr="lte")

    class Meta:
        model = DailyReport
        fields = ["status", "user"]
