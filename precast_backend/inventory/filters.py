# inventory/filters.py

"""
MOVEMENT LIST FILTERS

Typed query builder for GET /api/inventory/movements/ (django-filter).
Every optional query param maps to one ORM predicate; unknown params are ignored.
"""

import django_filters
from django.db.models import F, Q

from inventory.models import StockMovement


class StockMovementFilter(django_filters.FilterSet):
    item_class = django_filters.ChoiceFilter(choices=StockMovement.ItemClass.choices)
    kind = django_filters.ChoiceFilter(choices=StockMovement.Kind.choices)
    reference_kind = django_filters.ChoiceFilter(
        choices=StockMovement.ReferenceKind.choices
    )
    reference_id = django_filters.CharFilter()

    product = django_filters.UUIDFilter(field_name="product_id")
    material = django_filters.UUIDFilter(field_name="material_id")
    armature = django_filters.UUIDFilter(field_name="armature_id")
    actor = django_filters.UUIDFilter(field_name="actor_id")

    date_from = django_filters.DateFilter(field_name="created_at", lookup_expr="date__gte")
    date_to = django_filters.DateFilter(field_name="created_at", lookup_expr="date__lte")

    clamped = django_filters.BooleanFilter(method="filter_clamped")

    class Meta:
        model = StockMovement
        fields = [
            "item_class",
            "kind",
            "reference_kind",
            "reference_id",
            "product",
            "material",
            "armature",
            "actor",
        ]

    def filter_clamped(self, queryset, name, value):
        differs = ~Q(quantity=F("applied_quantity"))
        return queryset.filter(differs) if value else queryset.exclude(differs)
