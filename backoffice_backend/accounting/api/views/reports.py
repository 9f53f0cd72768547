# accounting/api/views/reports.py

"""
ACCOUNTING REPORT VIEWS (read-only, accounting.view)

GET /api/accounting/reports/daily/?date=YYYY-MM-DD          (default: today)
GET /api/accounting/reports/monthly/?year=YYYY&month=MM     (default: current month)
GET /api/accounting/reports/yearly/?year=YYYY               (default: current year)
GET /api/accounting/reports/profit-loss/?start_date=&end_date=
GET /api/accounting/reports/stock/
"""

from __future__ import annotations

from django.utils import timezone
from django.utils.dateparse import parse_date
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounting.services.exceptions import AccountingServiceError
from accounting.services.report_service import (
    daily_report,
    monthly_report,
    profit_and_loss,
    stock_report,
    yearly_report,
)
from permissions.roles import CAP_ACCOUNTING_VIEW, HasCapability


def _parse_date(value, field_name: str):
    s = str(value or "").strip()
    if s == "":
        return None
    d = parse_date(s)
    if d is None:
        raise ValueError(f"Invalid {field_name} (expected YYYY-MM-DD)")
    return d


def _parse_int(value, field_name: str, default: int) -> int:
    s = str(value or "").strip()
    if s == "":
        return default
    try:
        return int(s)
    except (TypeError, ValueError):
        raise ValueError(f"{field_name} must be an integer")


class _ReportView(APIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_ACCOUNTING_VIEW

    def build(self, request) -> dict:
        raise NotImplementedError

    def get(self, request):
        try:
            data = self.build(request)
        except (ValueError, AccountingServiceError) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(data, status=status.HTTP_200_OK)


class DailyReportView(_ReportView):
    @extend_schema(
        tags=["accounting"],
        parameters=[OpenApiParameter("date", str, OpenApiParameter.QUERY, required=False)],
        responses={200: dict},
    )
    def get(self, request):
        return super().get(request)

    def build(self, request):
        day = _parse_date(request.query_params.get("date"), "date") or timezone.localdate()
        return daily_report(day=day)


class MonthlyReportView(_ReportView):
    @extend_schema(
        tags=["accounting"],
        parameters=[
            OpenApiParameter("year", int, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("month", int, OpenApiParameter.QUERY, required=False),
        ],
        responses={200: dict},
    )
    def get(self, request):
        return super().get(request)

    def build(self, request):
        today = timezone.localdate()
        year = _parse_int(request.query_params.get("year"), "year", today.year)
        month = _parse_int(request.query_params.get("month"), "month", today.month)
        return monthly_report(year=year, month=month)


class YearlyReportView(_ReportView):
    @extend_schema(
        tags=["accounting"],
        parameters=[OpenApiParameter("year", int, OpenApiParameter.QUERY, required=False)],
        responses={200: dict},
    )
    def get(self, request):
        return super().get(request)

    def build(self, request):
        year = _parse_int(request.query_params.get("year"), "year", timezone.localdate().year)
        return yearly_report(year=year)


class ProfitAndLossView(_ReportView):
    @extend_schema(
        tags=["accounting"],
        parameters=[
            OpenApiParameter("start_date", str, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("end_date", str, OpenApiParameter.QUERY, required=False),
        ],
        responses={200: dict},
    )
    def get(self, request):
        return super().get(request)

    def build(self, request):
        start = _parse_date(request.query_params.get("start_date"), "start_date")
        end = _parse_date(request.query_params.get("end_date"), "end_date")
        return profit_and_loss(start=start, end=end)


class StockReportView(_ReportView):
    @extend_schema(tags=["accounting"], responses={200: dict})
    def get(self, request):
        return super().get(request)

    def build(self, request):
        return stock_report()
