# sales/serializers/commands.py

"""
Command serializers for the order workflow endpoints.

These serializers do NOT touch the database; they only validate input
before it is handed to sales.services.order_service.
"""

from django.conf import settings
from rest_framework import serializers

from sales.models import Payment


class OrderLineInputSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)
    unit_price = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, required=False
    )


class OrderCreateSerializer(serializers.Serializer):
    client_id = serializers.UUIDField()
    order_date = serializers.DateField(required=False)
    delivery_date = serializers.DateField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    items = OrderLineInputSerializer(many=True, allow_empty=True)


class QuoteCreateSerializer(serializers.Serializer):
    validity_days = serializers.IntegerField(min_value=1, default=30)
    notes = serializers.CharField(required=False, allow_blank=True, default="")

    def validate_validity_days(self, value):
        maximum = settings.QUOTE_MAX_VALIDITY_DAYS
        if value > maximum:
            raise serializers.ValidationError(f"Must be at most {maximum} days.")
        return value


class QuoteRejectSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, default="", max_length=255)


class InvoiceCreateSerializer(serializers.Serializer):
    due_days = serializers.IntegerField(min_value=1, default=30)
    notes = serializers.CharField(required=False, allow_blank=True, default="")

    def validate_due_days(self, value):
        maximum = settings.INVOICE_MAX_DUE_DAYS
        if value > maximum:
            raise serializers.ValidationError(f"Must be at most {maximum} days.")
        return value


class PaymentCreateSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    method = serializers.ChoiceField(
        choices=[choice for choice, _ in Payment.METHOD_CHOICES],
        default=Payment.METHOD_CASH,
    )
    payment_date = serializers.DateField(required=False)
    reference = serializers.CharField(required=False, allow_blank=True, default="", max_length=100)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class OrderCancelSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, default="", max_length=255)
