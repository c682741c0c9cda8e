# inventory/models/__init__.py

"""
INVENTORY MODELS PACKAGE EXPORTS
"""

from .stock import FinishedProductStock, RawMaterialStock, SubAssemblyStock
from .stock_movement import StockMovement

__all__ = [
    "FinishedProductStock",
    "RawMaterialStock",
    "SubAssemblyStock",
    "StockMovement",
]
