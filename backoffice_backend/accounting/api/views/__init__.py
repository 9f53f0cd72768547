from .reports import (
    DailyReportView,
    MonthlyReportView,
    ProfitAndLossView,
    StockReportView,
    YearlyReportView,
)
from .transactions import TransactionViewSet

__all__ = [
    "DailyReportView",
    "MonthlyReportView",
    "ProfitAndLossView",
    "StockReportView",
    "TransactionViewSet",
    "YearlyReportView",
]
