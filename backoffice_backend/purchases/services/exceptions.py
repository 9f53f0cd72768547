# purchases/services/exceptions.py


class PurchaseError(ValueError):
    pass


class InvalidPurchase(PurchaseError):
    pass
