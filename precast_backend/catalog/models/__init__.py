# catalog/models/__init__.py

"""
CATALOG MODELS PACKAGE EXPORTS

Purpose:
- Central export surface for master data (stock items + clients).
"""

from .armature import Armature
from .client import Client
from .material import Material
from .pba_product import PbaProduct

__all__ = [
    "PbaProduct",
    "Material",
    "Armature",
    "Client",
]
