# accounting/services/exceptions.py

"""
ACCOUNTING SERVICE ERRORS

Centralized domain errors for accounting services.
"""


class AccountingServiceError(Exception):
    """Base exception for all accounting service failures."""


class TransactionLockedError(AccountingServiceError):
    """Raised when a non-pending transaction is edited or deleted."""


class ReportPeriodError(AccountingServiceError):
    """Raised when a report period cannot be interpreted."""
