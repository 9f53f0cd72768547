# orders/serializers/order.py

"""
ORDER SERIALIZERS

Read side: OrderSerializer (+ nested items).
Write side: command serializers only; totals, stock and status are never
client-writable.
"""

from rest_framework import serializers

from orders.models import Order, OrderItem


class OrderItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderItem
        fields = ["id", "product", "name", "price", "quantity", "subtotal"]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)
    processed_by_email = serializers.EmailField(source="processed_by.email", read_only=True, default=None)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "customer",
            "customer_name",
            "customer_email",
            "customer_phone",
            "shipping_address",
            "items",
            "subtotal",
            "tax_amount",
            "shipping_amount",
            "discount_amount",
            "total_amount",
            "status",
            "payment_status",
            "payment_method",
            "notes",
            "cancel_reason",
            "return_reason",
            "tracking_number",
            "processed_by",
            "processed_by_email",
            "processed_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class OrderItemInputSerializer(serializers.Serializer):
    product = serializers.UUIDField()
    # range checks live in the order service
    quantity = serializers.IntegerField()


class OrderCreateSerializer(serializers.Serializer):
    items = OrderItemInputSerializer(many=True, allow_empty=True)
    payment_method = serializers.ChoiceField(
        choices=Order.PaymentMethod.choices, required=False, default=Order.PaymentMethod.CASH
    )
    # honored for staff only; customers always order for themselves
    customer = serializers.UUIDField(required=False, allow_null=True)
    customer_name = serializers.CharField(required=False, allow_blank=True, max_length=120)
    customer_email = serializers.EmailField(required=False, allow_blank=True)
    customer_phone = serializers.CharField(required=False, allow_blank=True, max_length=40)
    shipping_address = serializers.DictField(required=False)
    notes = serializers.CharField(required=False, allow_blank=True)


class OrderStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.Status.choices)
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    tracking_number = serializers.CharField(required=False, allow_blank=True, default="", max_length=64)
