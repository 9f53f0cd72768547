# orders/services/exceptions.py

"""
Order domain errors.

Views map these to HTTP:
- InvalidOrderItems / ProductUnavailable -> 400
- OrderItemRejected -> status of the underlying stock error (404 / 409 / 400)
- InvalidOrderTransition -> 400
"""


class OrderError(Exception):
    """Base class for order workflow failures."""


class InvalidOrderItems(OrderError):
    pass


class ProductUnavailable(InvalidOrderItems):
    def __init__(self, product_id, name: str = ""):
        self.product_id = product_id
        super().__init__(f"Product {name or product_id} is not available for ordering")


class OrderItemRejected(InvalidOrderItems):
    """
    One line of an order could not be reserved. The whole order is rolled
    back; the original error is chained as __cause__.
    """

    def __init__(self, *, index: int, product_id, reason: Exception):
        self.index = index
        self.product_id = product_id
        self.reason = reason
        super().__init__(f"Item {index + 1} (product {product_id}) rejected: {reason}")


class InvalidOrderTransition(OrderError):
    pass
