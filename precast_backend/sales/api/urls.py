# sales/api/urls.py

"""
SALES API URLS

Provides:
- /api/sales/orders/                       list / create
- /api/sales/orders/<uuid>/                retrieve / discard (draft)
- /api/sales/orders/<uuid>/confirm/        POST
- /api/sales/orders/<uuid>/quote/          POST
- /api/sales/orders/<uuid>/quote/accept/   POST
- /api/sales/orders/<uuid>/quote/reject/   POST
- /api/sales/orders/<uuid>/invoice/        POST
- /api/sales/orders/<uuid>/payment/        POST
- /api/sales/orders/<uuid>/cancel/         POST
- /api/sales/quotes/, /api/sales/invoices/ read-only
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from sales.api.viewsets.order import InvoiceViewSet, OrderViewSet, QuoteViewSet

router = DefaultRouter()
router.register(r"orders", OrderViewSet, basename="orders")
router.register(r"quotes", QuoteViewSet, basename="quotes")
router.register(r"invoices", InvoiceViewSet, basename="invoices")

urlpatterns = [
    path("", include(router.urls)),
]
