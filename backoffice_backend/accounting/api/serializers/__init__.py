from .transaction import TransactionSerializer, TransactionSummarySerializer

__all__ = ["TransactionSerializer", "TransactionSummarySerializer"]
