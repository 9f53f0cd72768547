# products/views/__init__.py

"""
Products views package exports.
"""

from .brand import BrandViewSet
from .category import CategoryViewSet
from .product import ProductViewSet
from .seller import SellerViewSet

__all__ = [
    "BrandViewSet",
    "CategoryViewSet",
    "ProductViewSet",
    "SellerViewSet",
]
