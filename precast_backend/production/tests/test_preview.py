# production/tests/test_preview.py

from datetime import date
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase

from catalog.models import Armature, Material, PbaProduct
from production.models import PersonnelLine
from production.services.preview import render_report_preview
from production.services.reports import create_report

User = get_user_model()


class ReportPreviewTests(TestCase):
    """
    GUARANTEES:
    - The preview lists every non-empty section with its totals
    - Empty sections are left out
    """

    def setUp(self):
        self.foreman = User.objects.create_user(
            email="foreman@example.com",
            password="pass",
            role="production",
            first_name="Jean",
            last_name="Dupont",
        )
        self.p12 = PbaProduct.objects.create(code="PBA-12", name="12", category=PbaProduct.Category.AR12)
        self.p9 = PbaProduct.objects.create(code="PBA-9", name="9", category=PbaProduct.Category.AR9)
        self.steel = Material.objects.create(
            code="FER-10", name="Steel", category=Material.Category.STEEL, unit=Material.Unit.KG
        )
        self.armature = Armature.objects.create(code="ARM-12", name="Cage 12")

    def test_full_preview(self):
        report = create_report(
            actor=self.foreman,
            report_date=date(2026, 10, 19),
            observations="Mould 3 cleaned",
            pba_lines=[
                {"product_id": self.p12.id, "quantity": 40},
                {"product_id": self.p9.id, "quantity": 15},
            ],
            material_lines=[
                {"material_id": self.steel.id, "quantity": Decimal("250.000"), "additional_info": "bars"},
            ],
            armature_lines=[{"armature_id": self.armature.id, "quantity": 1}],
            personnel_lines=[
                {"position": PersonnelLine.Position.WELDER, "quantity": 3},
                {"position": PersonnelLine.Position.MASON, "quantity": 1},
            ],
        )

        text = render_report_preview(report)

        self.assertTrue(text.startswith("Report for 19 October 2026 - Jean Dupont"))
        self.assertIn("PBA-12 = 40", text)
        self.assertIn("PBA-9 = 15", text)
        self.assertIn("Total PBA: 55", text)
        self.assertIn("Materials used: 250kg FER-10 bars", text)
        self.assertIn("1 armature ARM-12", text)
        self.assertIn("Total armatures: 1", text)
        self.assertIn("3 welders", text)
        self.assertIn("1 mason", text)
        self.assertIn("Total personnel: 4", text)
        self.assertTrue(text.endswith("Observations: Mould 3 cleaned"))

    def test_empty_sections_are_omitted(self):
        report = create_report(actor=self.foreman, report_date=date(2026, 10, 20))

        text = render_report_preview(report)

        self.assertEqual(text, "Report for 20 October 2026 - Jean Dupont")
