"""
PATH: products/models/__init__.py

Products models export surface.
"""

from .brand import Brand
from .category import Category
from .inventory_movement import InventoryMovement
from .product import Product
from .seller import Seller

__all__ = [
    "Brand",
    "Category",
    "InventoryMovement",
    "Product",
    "Seller",
]
