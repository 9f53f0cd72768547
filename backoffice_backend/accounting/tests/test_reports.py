# accounting/tests/test_reports.py

from datetime import date
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from accounting.services.exceptions import ReportPeriodError
from accounting.services.report_service import (
    daily_report,
    monthly_report,
    profit_and_loss,
    stock_report,
    yearly_report,
)
from accounting.services.transaction_service import record_transaction
from products.models import Category, Product

User = get_user_model()


class ReportServiceTests(TestCase):
    """
    Reports only count COMPLETED transactions.
    """

    def setUp(self):
        record_transaction(type="income", category="sale", amount="400.00", date=date(2025, 5, 3))
        record_transaction(type="income", category="other", amount="100.00", date=date(2025, 5, 3))
        record_transaction(type="expense", category="purchase", amount="150.00", date=date(2025, 5, 10))
        record_transaction(type="expense", category="return", amount="50.00", date=date(2025, 5, 10))
        record_transaction(type="expense", category="rent", amount="300.00", date=date(2025, 2, 1))
        record_transaction(
            type="income", category="sale", amount="999.00", date=date(2025, 5, 3), status="pending"
        )

    def test_daily_report(self):
        report = daily_report(day=date(2025, 5, 3))

        self.assertEqual(report["date"], "2025-05-03")
        self.assertEqual(report["transactions"]["income"], Decimal("500.00"))
        self.assertEqual(report["transactions"]["expense"], Decimal("0.00"))
        self.assertEqual(report["transactions"]["count"], 2)
        self.assertEqual(report["orders"]["total"], 0)

    def test_monthly_report(self):
        report = monthly_report(year=2025, month=5)
        summary = report["summary"]

        self.assertEqual(summary["income"], Decimal("500.00"))
        self.assertEqual(summary["expense"], Decimal("200.00"))
        self.assertEqual(summary["profit"], Decimal("300.00"))
        self.assertEqual(summary["profit_margin"], Decimal("60.00"))
        self.assertEqual(report["period"]["end_date"], "2025-05-31")

        categories = {(row["type"], row["category"]): row["total"] for row in report["by_category"]}
        self.assertEqual(categories[("income", "sale")], Decimal("400.00"))
        self.assertEqual(categories[("expense", "purchase")], Decimal("150.00"))

        days = {row["day"] for row in report["daily"]}
        self.assertEqual(days, {3, 10})

    def test_monthly_report_rejects_bad_month(self):
        with self.assertRaises(ReportPeriodError):
            monthly_report(year=2025, month=13)

    def test_yearly_report(self):
        report = yearly_report(year=2025)

        self.assertEqual(report["summary"]["expense"], Decimal("500.00"))
        months = {row["month"] for row in report["monthly"]}
        self.assertEqual(months, {2, 5})

    def test_profit_and_loss(self):
        report = profit_and_loss(start=date(2025, 5, 1), end=date(2025, 5, 31))

        self.assertEqual(report["revenue"]["sales"], Decimal("400.00"))
        self.assertEqual(report["revenue"]["other"], Decimal("100.00"))
        self.assertEqual(report["expenses"]["purchase"], Decimal("150.00"))
        self.assertEqual(report["expenses"]["return"], Decimal("50.00"))
        self.assertEqual(report["expenses"]["rent"], Decimal("0.00"))
        self.assertEqual(report["total_expenses"], Decimal("200.00"))
        self.assertEqual(report["net_profit"], Decimal("300.00"))

    def test_profit_and_loss_rejects_inverted_range(self):
        with self.assertRaises(ReportPeriodError):
            profit_and_loss(start=date(2025, 6, 1), end=date(2025, 5, 1))

    def test_profit_margin_is_zero_without_income(self):
        report = profit_and_loss(start=date(2025, 2, 1), end=date(2025, 2, 28))
        self.assertEqual(report["net_profit"], Decimal("-300.00"))
        self.assertEqual(report["profit_margin"], Decimal("0.00"))


class StockReportTests(TestCase):
    def test_stock_report_values_at_unit_price(self):
        drinks = Category.objects.create(name="Drinks")
        Product.objects.create(name="Cola", sku="C-1", unit_price=Decimal("1.50"), quantity=10, low_stock_quantity=3, category=drinks)
        Product.objects.create(name="Water", sku="W-1", unit_price=Decimal("0.50"), quantity=2, low_stock_quantity=3, category=drinks)
        Product.objects.create(name="Soap", sku="S-1", unit_price=Decimal("3.00"), quantity=0)

        report = stock_report()

        self.assertEqual(report["total"]["products"], 3)
        self.assertEqual(report["total"]["quantity"], 12)
        self.assertEqual(report["total"]["value"], Decimal("16.00"))
        self.assertEqual(report["low_stock"]["count"], 1)
        self.assertEqual(report["out_of_stock"]["count"], 1)
        self.assertEqual(report["out_of_stock"]["products"][0]["name"], "Soap")

        by_category = {row["category"]: row for row in report["by_category"]}
        self.assertEqual(by_category["Drinks"]["value"], Decimal("16.00"))
        self.assertEqual(by_category["Uncategorized"]["quantity"], 0)


class ReportApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.staff = User.objects.create_user(email="staff@example.com", password="pass12345", role="staff")
        self.customer = User.objects.create_user(email="buyer@example.com", password="pass12345")

    def test_staff_reads_reports(self):
        self.client.force_authenticate(self.staff)

        for url in (
            "/api/accounting/reports/daily/?date=2025-05-03",
            "/api/accounting/reports/monthly/?year=2025&month=5",
            "/api/accounting/reports/yearly/?year=2025",
            "/api/accounting/reports/profit-loss/?start_date=2025-01-01&end_date=2025-12-31",
            "/api/accounting/reports/stock/",
        ):
            res = self.client.get(url)
            self.assertEqual(res.status_code, 200, url)

    def test_bad_parameters_are_400(self):
        self.client.force_authenticate(self.staff)

        self.assertEqual(self.client.get("/api/accounting/reports/daily/?date=03-05-2025").status_code, 400)
        self.assertEqual(self.client.get("/api/accounting/reports/monthly/?month=abc").status_code, 400)
        self.assertEqual(
            self.client.get(
                "/api/accounting/reports/profit-loss/?start_date=2025-02-01&end_date=2025-01-01"
            ).status_code,
            400,
        )

    def test_customer_is_forbidden(self):
        self.client.force_authenticate(self.customer)
        self.assertEqual(self.client.get("/api/accounting/reports/daily/").status_code, 403)
