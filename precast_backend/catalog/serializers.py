# catalog/serializers.py

from rest_framework import serializers

from catalog.models import Armature, Client, Material, PbaProduct


class _CodedItemSerializer(serializers.ModelSerializer):
    """
    Shared rules for stock items:
    - code is trimmed and upper-cased (codes are printed on reports)
    - unit_price cannot be negative
    """

    def validate_code(self, value: str):
        v = (value or "").strip().upper()
        if not v:
            raise serializers.ValidationError("code cannot be blank")
        return v

    def validate_unit_price(self, value):
        if value is not None and value < 0:
            raise serializers.ValidationError("unit_price cannot be negative")
        return value


class PbaProductSerializer(_CodedItemSerializer):
    class Meta:
        model = PbaProduct
        fields = [
            "id",
            "code",
            "name",
            "category",
            "description",
            "unit_price",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]


class MaterialSerializer(_CodedItemSerializer):
    class Meta:
        model = Material
        fields = [
            "id",
            "code",
            "name",
            "category",
            "unit",
            "description",
            "unit_price",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]


class ArmatureSerializer(_CodedItemSerializer):
    pba_product_code = serializers.CharField(
        source="pba_product.code", read_only=True, default=None
    )

    class Meta:
        model = Armature
        fields = [
            "id",
            "code",
            "name",
            "description",
            "pba_product",
            "pba_product_code",
            "unit_price",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "pba_product_code", "created_at", "updated_at"]


class ClientSerializer(serializers.ModelSerializer):
    name = serializers.CharField(required=True, allow_blank=False, max_length=255)

    class Meta:
        model = Client
        fields = [
            "id",
            "name",
            "contact_person",
            "email",
            "phone",
            "address",
            "city",
            "tax_id",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_name(self, value: str):
        v = (value or "").strip()
        if not v:
            raise serializers.ValidationError("name cannot be blank")
        return v
