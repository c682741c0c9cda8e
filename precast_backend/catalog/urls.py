# catalog/urls.py

"""
CATALOG URLS

Provides (under /api/catalog/):
- products/     finished PBA products
- materials/    raw materials
- armatures/    sub-assemblies
- clients/
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from catalog.views import ArmatureViewSet, ClientViewSet, MaterialViewSet, PbaProductViewSet

router = DefaultRouter()

router.register(r"products", PbaProductViewSet, basename="catalog-products")
router.register(r"materials", MaterialViewSet, basename="catalog-materials")
router.register(r"armatures", ArmatureViewSet, basename="catalog-armatures")
router.register(r"clients", ClientViewSet, basename="catalog-clients")

urlpatterns = [
    path("", include(router.urls)),
]
