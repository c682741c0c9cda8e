# sales/serializers/order.py

from rest_framework import serializers

from sales.models import Invoice, Order, OrderItem, Payment, Quote


class OrderItemSerializer(serializers.ModelSerializer):
    product_code = serializers.CharField(source="product.code", read_only=True)
    product_name = serializers.CharField(source="product.name", read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "product",
            "product_code",
            "product_name",
            "quantity",
            "unit_price",
            "line_total",
        ]
        read_only_fields = fields


class QuoteSerializer(serializers.ModelSerializer):
    order_number = serializers.CharField(source="order.number", read_only=True)

    class Meta:
        model = Quote
        fields = [
            "id",
            "number",
            "order",
            "order_number",
            "issue_date",
            "valid_until",
            "status",
            "total_amount",
            "notes",
            "created_at",
        ]
        read_only_fields = fields


class PaymentSerializer(serializers.ModelSerializer):
    recorded_by_email = serializers.EmailField(source="recorded_by.email", read_only=True, default=None)

    class Meta:
        model = Payment
        fields = [
            "id",
            "invoice",
            "payment_date",
            "amount",
            "method",
            "reference",
            "notes",
            "recorded_by_email",
            "created_at",
        ]
        read_only_fields = fields


class InvoiceSerializer(serializers.ModelSerializer):
    order_number = serializers.CharField(source="order.number", read_only=True)
    remaining_amount = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)
    payments = PaymentSerializer(many=True, read_only=True)

    class Meta:
        model = Invoice
        fields = [
            "id",
            "number",
            "order",
            "order_number",
            "issue_date",
            "due_date",
            "status",
            "total_amount",
            "paid_amount",
            "remaining_amount",
            "notes",
            "payments",
            "created_at",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    client_name = serializers.CharField(source="client.name", read_only=True)
    items = OrderItemSerializer(many=True, read_only=True)
    quotes = QuoteSerializer(many=True, read_only=True)
    invoice = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            "id",
            "number",
            "client",
            "client_name",
            "status",
            "order_date",
            "delivery_date",
            "total_amount",
            "notes",
            "items",
            "quotes",
            "invoice",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_invoice(self, obj):
        invoice = Invoice.objects.filter(order=obj).first()
        if invoice is None:
            return None
        return InvoiceSerializer(invoice).data
