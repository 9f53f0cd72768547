from .order import (
    OrderCreateSerializer,
    OrderItemInputSerializer,
    OrderItemSerializer,
    OrderSerializer,
    OrderStatusUpdateSerializer,
)

__all__ = [
    "OrderCreateSerializer",
    "OrderItemInputSerializer",
    "OrderItemSerializer",
    "OrderSerializer",
    "OrderStatusUpdateSerializer",
]
