# products/services/exceptions.py

"""
Stock domain errors.

Views map these to HTTP:
- ProductNotFound   -> 404
- InsufficientStock -> 409
- InvalidDelta      -> 400
"""


class StockError(Exception):
    """Base class for stock adjustment failures."""


class ProductNotFound(StockError):
    def __init__(self, product_id):
        self.product_id = product_id
        super().__init__(f"Product {product_id} not found")


class InsufficientStock(StockError):
    def __init__(self, *, product_id, requested: int, available: int | None = None, product_name: str = ""):
        self.product_id = product_id
        self.requested = requested
        self.available = available
        label = product_name or str(product_id)
        if available is None:
            message = f"Insufficient stock for {label}: requested {requested}"
        else:
            message = f"Insufficient stock for {label}: requested {requested}, available {available}"
        super().__init__(message)


class InvalidDelta(StockError):
    pass
