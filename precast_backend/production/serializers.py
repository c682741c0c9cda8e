# production/serializers.py

from rest_framework import serializers

from catalog.models import Material
from production.models import (
    ArmatureProductionLine,
    DailyReport,
    MaterialUsageLine,
    PbaProductionLine,
    PersonnelLine,
)


# ==========================================================
# READ
# ==========================================================


class PbaProductionLineSerializer(serializers.ModelSerializer):
    product_code = serializers.CharField(source="product.code", read_only=True)

    class Meta:
        model = PbaProductionLine
        fields = ["id", "product", "product_code", "quantity"]


class MaterialUsageLineSerializer(serializers.ModelSerializer):
    material_code = serializers.CharField(source="material.code", read_only=True)

    class Meta:
        model = MaterialUsageLine
        fields = ["id", "material", "material_code", "quantity", "unit", "additional_info"]


class ArmatureProductionLineSerializer(serializers.ModelSerializer):
    armature_code = serializers.CharField(source="armature.code", read_only=True)

    class Meta:
        model = ArmatureProductionLine
        fields = ["id", "armature", "armature_code", "quantity"]


class PersonnelLineSerializer(serializers.ModelSerializer):
    class Meta:
        model = PersonnelLine
        fields = ["id", "position", "quantity"]


class DailyReportSerializer(serializers.ModelSerializer):
    user_email = serializers.EmailField(source="user.email", read_only=True)
    pba_lines = PbaProductionLineSerializer(many=True, read_only=True)
    material_lines = MaterialUsageLineSerializer(many=True, read_only=True)
    armature_lines = ArmatureProductionLineSerializer(many=True, read_only=True)
    personnel_lines = PersonnelLineSerializer(many=True, read_only=True)

    class Meta:
        model = DailyReport
        fields = [
            "id",
            "user",
            "user_email",
            "report_date",
            "first_name",
            "last_name",
            "status",
            "observations",
            "submitted_at",
            "submitted_by",
            "pba_lines",
            "material_lines",
            "armature_lines",
            "personnel_lines",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


# ==========================================================
# WRITE (input shapes for the drafts service)
# ==========================================================


class PbaLineInputSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=0)


class MaterialLineInputSerializer(serializers.Serializer):
    material_id = serializers.UUIDField()
    quantity = serializers.DecimalField(max_digits=12, decimal_places=3, min_value=0)
    unit = serializers.ChoiceField(choices=Material.Unit.choices, required=False)
    additional_info = serializers.CharField(
        required=False, allow_blank=True, default="", max_length=255
    )


class ArmatureLineInputSerializer(serializers.Serializer):
    armature_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=0)


class PersonnelLineInputSerializer(serializers.Serializer):
    position = serializers.ChoiceField(choices=PersonnelLine.Position.choices)
    quantity = serializers.IntegerField(min_value=0)


class DailyReportInputSerializer(serializers.Serializer):
    report_date = serializers.DateField()
    first_name = serializers.CharField(required=False, allow_blank=True, default="", max_length=100)
    last_name = serializers.CharField(required=False, allow_blank=True, default="", max_length=100)
    observations = serializers.CharField(required=False, allow_blank=True, default="")

    pba_lines = PbaLineInputSerializer(many=True, required=False, default=list)
    material_lines = MaterialLineInputSerializer(many=True, required=False, default=list)
    armature_lines = ArmatureLineInputSerializer(many=True, required=False, default=list)
    personnel_lines = PersonnelLineInputSerializer(many=True, required=False, default=list)


class DailyReportUpdateSerializer(DailyReportInputSerializer):
    report_date = None


class ReportPreviewSerializer(serializers.Serializer):
    report_id = serializers.UUIDField()
    preview = serializers.CharField()
