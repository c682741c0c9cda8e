# sales/admin.py

from django.contrib import admin

from sales.models import DocumentSequence, Invoice, Order, OrderItem, Payment, Quote


# ======================================================
# ORDER ADMIN
# ======================================================


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ("product", "quantity", "unit_price", "line_total")

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("number", "client", "status", "order_date", "total_amount")
    list_filter = ("status",)
    search_fields = ("number", "client__name")
    readonly_fields = ("number", "status", "total_amount", "created_at", "updated_at")
    inlines = [OrderItemInline]


# ======================================================
# DOCUMENTS (read-only: created by the workflow)
# ======================================================


class _ReadOnlyAdmin(admin.ModelAdmin):
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Quote)
class QuoteAdmin(_ReadOnlyAdmin):
    list_display = ("number", "order", "status", "issue_date", "valid_until", "total_amount")
    list_filter = ("status",)
    search_fields = ("number", "order__number")


@admin.register(Invoice)
class InvoiceAdmin(_ReadOnlyAdmin):
    list_display = ("number", "order", "status", "due_date", "total_amount", "paid_amount")
    list_filter = ("status",)
    search_fields = ("number", "order__number")


@admin.register(Payment)
class PaymentAdmin(_ReadOnlyAdmin):
    list_display = ("invoice", "payment_date", "amount", "method", "reference")
    list_filter = ("method",)


@admin.register(DocumentSequence)
class DocumentSequenceAdmin(_ReadOnlyAdmin):
    list_display = ("kind", "period", "last_number", "updated_at")
