# products/urls.py

"""
PRODUCTS URLS

Purpose:
- Register catalog (categories, brands, sellers, products) + inventory routes
  under /api/products/
- Includes viewset actions like:
    /products/products/low-stock/
    /products/products/<id>/stock/
    /products/products/<id>/movements/
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from products.views import BrandViewSet, CategoryViewSet, ProductViewSet, SellerViewSet

router = DefaultRouter()

router.register(r"categories", CategoryViewSet, basename="categories")
router.register(r"brands", BrandViewSet, basename="brands")
router.register(r"sellers", SellerViewSet, basename="sellers")
router.register(r"products", ProductViewSet, basename="products")

urlpatterns = [
    path("", include(router.urls)),
]
