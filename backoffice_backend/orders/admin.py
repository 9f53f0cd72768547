# orders/admin.py

from django.contrib import admin

from orders.models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    fields = ("product", "name", "price", "quantity", "subtotal")
    readonly_fields = fields
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Read-mostly: status changes and stock effects go through the API
    (orders.services.order_service), never through the admin form.
    """

    list_display = (
        "order_number",
        "customer",
        "status",
        "payment_status",
        "payment_method",
        "total_amount",
        "created_at",
    )
    list_filter = ("status", "payment_status", "payment_method")
    search_fields = ("order_number", "customer_name", "customer_email", "customer__email")
    readonly_fields = (
        "order_number",
        "customer",
        "status",
        "payment_status",
        "subtotal",
        "tax_amount",
        "shipping_amount",
        "discount_amount",
        "total_amount",
        "processed_by",
        "processed_at",
        "created_by",
        "created_at",
        "updated_at",
    )
    inlines = [OrderItemInline]
    ordering = ("-created_at",)

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
