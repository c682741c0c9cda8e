# sales/filters.py

import django_filters

from sales.models import Invoice, Order, Quote


class OrderFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=Order.STATUS_CHOICES)
    client = django_filters.UUIDFilter(field_name="client_id")
    number = django_filters.CharFilter(field_name="number", lookup_expr="icontains")
    date_from = django_filters.DateFilter(field_name="order_date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="order_date", lookup_expr="lte")

    class Meta:
        model = Order
        fields = ["status", "client"]


class QuoteFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=Quote.STATUS_CHOICES)
    order = django_filters.UUIDFilter(field_name="order_id")
    valid_before = django_filters.DateFilter(field_name="valid_until", lookup_expr="lt")

    class Meta:
        model = Quote
        fields = ["status", "order"]


class InvoiceFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=Invoice.STATUS_CHOICES)
    client = django_filters.UUIDFilter(field_name="order__client_id")
    due_before = django_filters.DateFilter(field_name="due_date", lookup_expr="lt")

    class Meta:
        model = Invoice
        fields = ["status", "client"]
