# purchases/admin.py

from django.contrib import admin

from purchases.models import Supplier, SupplierPurchase


class SupplierPurchaseInline(admin.TabularInline):
    model = SupplierPurchase
    extra = 0
    fields = ("date", "product_name", "quantity", "unit_price", "total_amount", "invoice_number")
    readonly_fields = fields
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Supplier)
class SupplierAdmin(admin.ModelAdmin):
    list_display = ("name", "company", "phone", "email", "status", "total_purchase_amount", "last_purchase_date")
    list_filter = ("status",)
    search_fields = ("name", "company", "email", "phone")
    readonly_fields = ("total_purchase_amount", "last_purchase_date", "created_at", "updated_at")
    inlines = [SupplierPurchaseInline]


@admin.register(SupplierPurchase)
class SupplierPurchaseAdmin(admin.ModelAdmin):
    list_display = ("supplier", "date", "product_name", "quantity", "unit_price", "total_amount", "received_into_stock")
    list_filter = ("received_into_stock",)
    search_fields = ("supplier__name", "product_name", "invoice_number")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
