# production/models/__init__.py

"""
PRODUCTION MODELS PACKAGE EXPORTS
"""

from .daily_report import DailyReport
from .report_lines import (
    ArmatureProductionLine,
    MaterialUsageLine,
    PbaProductionLine,
    PersonnelLine,
)

__all__ = [
    "DailyReport",
    "PbaProductionLine",
    "MaterialUsageLine",
    "ArmatureProductionLine",
    "PersonnelLine",
]
