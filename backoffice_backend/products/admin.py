# products/admin.py
"""
=====================================================
PATH: products/admin.py
=====================================================

Admin rules (audit-safe stock):

- quantity / stock_status / sold_quantity are read-only here;
  stock only moves through the adjustment gateway.
- InventoryMovement rows are view-only (no add, change or delete).
"""

from __future__ import annotations

from django.contrib import admin

from products.models import Brand, Category, InventoryMovement, Product, Seller


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "is_active")
    search_fields = ("name",)
    ordering = ("name",)


@admin.register(Brand)
class BrandAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "is_active")
    search_fields = ("name",)
    ordering = ("name",)


@admin.register(Seller)
class SellerAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "email", "rating", "status")
    list_filter = ("status",)
    search_fields = ("name", "email")
    ordering = ("name",)


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = (
        "sku",
        "name",
        "category",
        "brand",
        "unit_price",
        "quantity",
        "stock_status",
        "publish",
        "created_at",
    )
    list_filter = ("publish", "is_active", "stock_status", "category", "brand", "seller")
    search_fields = ("sku", "name", "barcode")
    ordering = ("-created_at",)
    readonly_fields = (
        "quantity",
        "stock_status",
        "sold_quantity",
        "created_at",
        "updated_at",
    )


@admin.register(InventoryMovement)
class InventoryMovementAdmin(admin.ModelAdmin):
    list_display = (
        "product",
        "movement_type",
        "quantity",
        "previous_quantity",
        "new_quantity",
        "reference",
        "created_by",
        "created_at",
    )
    list_filter = ("movement_type", "created_at")
    search_fields = ("product__name", "product__sku", "reference")
    ordering = ("-created_at",)

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
