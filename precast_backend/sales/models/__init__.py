# sales/models/__init__.py

"""
SALES MODELS PACKAGE EXPORTS

Purpose:
- Central export surface for the commercial pipeline
  (order -> quote -> invoice -> payment) and document numbering.
"""

from .document_sequence import DocumentSequence
from .invoice import Invoice
from .order import Order, OrderItem
from .payment import Payment
from .quote import Quote

__all__ = [
    "Order",
    "OrderItem",
    "Quote",
    "Invoice",
    "Payment",
    "DocumentSequence",
]
