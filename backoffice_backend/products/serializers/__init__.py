# products/serializers/__init__.py

from .brand import BrandSerializer
from .category import CategorySerializer
from .inventory_movement import InventoryMovementSerializer
from .product import ProductSerializer, StockAdjustmentRequestSerializer, StockLevelSerializer
from .seller import SellerSerializer

__all__ = [
    "BrandSerializer",
    "CategorySerializer",
    "InventoryMovementSerializer",
    "ProductSerializer",
    "SellerSerializer",
    "StockAdjustmentRequestSerializer",
    "StockLevelSerializer",
]
