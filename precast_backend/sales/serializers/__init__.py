from .commands import (
    InvoiceCreateSerializer,
    OrderCancelSerializer,
    OrderCreateSerializer,
    PaymentCreateSerializer,
    QuoteCreateSerializer,
    QuoteRejectSerializer,
)
from .order import (
    InvoiceSerializer,
    OrderItemSerializer,
    OrderSerializer,
    PaymentSerializer,
    QuoteSerializer,
)

__all__ = [
    "OrderSerializer",
    "OrderItemSerializer",
    "QuoteSerializer",
    "InvoiceSerializer",
    "PaymentSerializer",
    "OrderCreateSerializer",
    "QuoteCreateSerializer",
    "QuoteRejectSerializer",
    "InvoiceCreateSerializer",
    "PaymentCreateSerializer",
    "OrderCancelSerializer",
]
