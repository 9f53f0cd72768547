# accounting/api/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from accounting.api.views import (
    DailyReportView,
    MonthlyReportView,
    ProfitAndLossView,
    StockReportView,
    TransactionViewSet,
    YearlyReportView,
)

router = DefaultRouter()
router.register("transactions", TransactionViewSet, basename="transaction")

urlpatterns = [
    path("", include(router.urls)),
    # Reports
    path("reports/daily/", DailyReportView.as_view(), name="report-daily"),
    path("reports/monthly/", MonthlyReportView.as_view(), name="report-monthly"),
    path("reports/yearly/", YearlyReportView.as_view(), name="report-yearly"),
    path("reports/profit-loss/", ProfitAndLossView.as_view(), name="report-profit-loss"),
    path("reports/stock/", StockReportView.as_view(), name="report-stock"),
]
