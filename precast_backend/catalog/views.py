# catalog/views.py

"""
CATALOG API (master data)

Policy:
- Any authenticated user can READ (report and order forms need the lists)
- Writes require catalog.edit
- DELETE deactivates instead of deleting: stock items and clients are
  referenced by movements, reports and orders
"""

from __future__ import annotations

from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from catalog.models import Armature, Client, Material, PbaProduct
from catalog.serializers import (
    ArmatureSerializer,
    ClientSerializer,
    MaterialSerializer,
    PbaProductSerializer,
)
from permissions.roles import CAP_CATALOG_EDIT, HasCapability


class _CatalogViewSet(viewsets.ModelViewSet):
    filterset_fields = ["is_active"]

    def get_permissions(self):
        if self.action in {"list", "retrieve"}:
            return [IsAuthenticated()]

        self.required_capability = CAP_CATALOG_EDIT
        return [IsAuthenticated(), HasCapability()]

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        if instance.is_active:
            instance.is_active = False
            instance.save(update_fields=["is_active", "updated_at"])
        return Response(status=status.HTTP_204_NO_CONTENT)


class PbaProductViewSet(_CatalogViewSet):
    queryset = PbaProduct.objects.all().order_by("code")
    serializer_class = PbaProductSerializer
    filterset_fields = ["is_active", "category"]


class MaterialViewSet(_CatalogViewSet):
    queryset = Material.objects.all().order_by("code")
    serializer_class = MaterialSerializer
    filterset_fields = ["is_active", "category", "unit"]


class ArmatureViewSet(_CatalogViewSet):
    queryset = Armature.objects.select_related("pba_product").order_by("code")
    serializer_class = ArmatureSerializer
    filterset_fields = ["is_active", "pba_product"]


class ClientViewSet(_CatalogViewSet):
    queryset = Client.objects.all().order_by("name")
    serializer_class = ClientSerializer
    filterset_fields = ["is_active", "city"]
