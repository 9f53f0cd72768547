# accounting/services/report_service.py

"""
ACCOUNTING REPORTS (read-only)

Aggregations over COMPLETED transactions plus order and stock snapshots.

Contract:
- money values are Decimal quantized to 2 places (serialized as strings)
- profit = income - expense
- profit_margin = profit / income * 100 (0 when there is no income)
"""

from __future__ import annotations

import calendar
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from django.db.models import Count, DecimalField, F, IntegerField, Sum, Value
from django.db.models.functions import Coalesce, ExtractDay, ExtractMonth

from accounting.models import Transaction
from accounting.services.exceptions import ReportPeriodError
from orders.models import Order
from products.models import Product
from products.services.stock_status import LOW_STOCK, OUT_OF_STOCK

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")

_MONEY = DecimalField(max_digits=16, decimal_places=2)


def _q2(amount) -> Decimal:
    return Decimal(str(amount or ZERO)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def _sum(qs, field="amount") -> Decimal:
    return _q2(qs.aggregate(total=Coalesce(Sum(field), Value(ZERO), output_field=_MONEY))["total"])


def _completed(start: date | None = None, end: date | None = None):
    qs = Transaction.objects.filter(status=Transaction.Status.COMPLETED)
    if start is not None:
        qs = qs.filter(date__gte=start)
    if end is not None:
        qs = qs.filter(date__lte=end)
    return qs


def summarize(qs) -> dict:
    income = _sum(qs.filter(type=Transaction.Type.INCOME))
    expense = _sum(qs.filter(type=Transaction.Type.EXPENSE))
    profit = income - expense
    margin = _q2(profit / income * 100) if income > 0 else ZERO
    return {
        "income": income,
        "expense": expense,
        "profit": profit,
        "profit_margin": margin,
        "count": qs.count(),
    }


def _order_stats(start: date, end: date) -> dict:

    orders = Order.objects.filter(created_at__date__gte=start, created_at__date__lte=end)
    delivered = orders.filter(status=Order.Status.DELIVERED)
    return {
        "total": orders.count(),
        "pending": orders.filter(status=Order.Status.PENDING).count(),
        "delivered": delivered.count(),
        "cancelled": orders.filter(status=Order.Status.CANCELLED).count(),
        "revenue": _sum(delivered, "total_amount"),
    }


def _check_month(year: int, month: int) -> None:
    if not (1 <= month <= 12):
        raise ReportPeriodError("month must be between 1 and 12")
    if not (1 <= year <= 9999):
        raise ReportPeriodError("year is out of range")


def daily_report(*, day: date) -> dict:
    qs = _completed(day, day)
    return {
        "date": day.isoformat(),
        "transactions": summarize(qs),
        "orders": _order_stats(day, day),
    }


def monthly_report(*, year: int, month: int) -> dict:
    _check_month(year, month)
    start = date(year, month, 1)
    end = date(year, month, calendar.monthrange(year, month)[1])

    qs = _completed(start, end)

    by_category = [
        {
            "type": row["type"],
            "category": row["category"],
            "total": _q2(row["total"]),
            "count": row["count"],
        }
        for row in qs.values("type", "category")
        .annotate(total=Sum("amount"), count=Count("id"))
        .order_by("type", "category")
    ]

    daily = [
        {"day": row["day"], "type": row["type"], "total": _q2(row["total"])}
        for row in qs.annotate(day=ExtractDay("date"))
        .values("day", "type")
        .annotate(total=Sum("amount"))
        .order_by("day", "type")
    ]

    return {
        "period": {
            "year": year,
            "month": month,
            "start_date": start.isoformat(),
            "end_date": end.isoformat(),
        },
        "summary": summarize(qs),
        "by_category": by_category,
        "orders": _order_stats(start, end),
        "daily": daily,
    }


def yearly_report(*, year: int) -> dict:
    _check_month(year, 1)
    start = date(year, 1, 1)
    end = date(year, 12, 31)

    qs = _completed(start, end)

    monthly = [
        {"month": row["month"], "type": row["type"], "total": _q2(row["total"])}
        for row in qs.annotate(month=ExtractMonth("date"))
        .values("month", "type")
        .annotate(total=Sum("amount"))
        .order_by("month", "type")
    ]

    return {
        "year": year,
        "summary": summarize(qs),
        "orders": _order_stats(start, end),
        "monthly": monthly,
    }


def profit_and_loss(*, start: date | None = None, end: date | None = None) -> dict:
    if start and end and start > end:
        raise ReportPeriodError("start_date cannot be after end_date")

    qs = _completed(start, end)
    income = qs.filter(type=Transaction.Type.INCOME)
    expense = qs.filter(type=Transaction.Type.EXPENSE)

    C = Transaction.Category
    itemized = [C.PURCHASE, C.DAMAGE, C.SALARY, C.RENT, C.UTILITY, C.RETURN]

    revenue = {
        "sales": _sum(income.filter(category=C.SALE)),
        "other": _sum(income.exclude(category=C.SALE)),
    }
    expenses = {str(cat): _sum(expense.filter(category=cat)) for cat in itemized}
    expenses["other"] = _sum(expense.exclude(category__in=itemized))

    total_revenue = revenue["sales"] + revenue["other"]
    total_expenses = sum(expenses.values(), ZERO)
    net_profit = total_revenue - total_expenses

    return {
        "period": {
            "start_date": start.isoformat() if start else None,
            "end_date": end.isoformat() if end else None,
        },
        "revenue": revenue,
        "total_revenue": total_revenue,
        "expenses": expenses,
        "total_expenses": total_expenses,
        "net_profit": net_profit,
        "profit_margin": _q2(net_profit / total_revenue * 100) if total_revenue > 0 else ZERO,
    }


def stock_report() -> dict:
    """Stock valued at the current selling price."""
    products = Product.objects.select_related("category")
    value_expr = F("quantity") * F("unit_price")

    totals = products.aggregate(
        count=Count("id"),
        quantity=Coalesce(Sum("quantity"), Value(0), output_field=IntegerField()),
        value=Coalesce(Sum(value_expr, output_field=_MONEY), Value(ZERO), output_field=_MONEY),
    )

    low = products.filter(stock_status=LOW_STOCK).order_by("quantity", "name")
    out = products.filter(stock_status=OUT_OF_STOCK).order_by("name")

    by_category = [
        {
            "category": row["category__name"] or "Uncategorized",
            "products": row["count"],
            "quantity": row["quantity"] or 0,
            "value": _q2(row["value"]),
        }
        for row in products.values("category__name")
        .annotate(
            count=Count("id"),
            quantity=Sum("quantity"),
            value=Sum(value_expr, output_field=_MONEY),
        )
        .order_by("category__name")
    ]

    return {
        "total": {
            "products": totals["count"],
            "quantity": totals["quantity"],
            "value": _q2(totals["value"]),
        },
        "low_stock": {
            "count": low.count(),
            "products": [
                {
                    "id": str(p.pk),
                    "name": p.name,
                    "quantity": p.quantity,
                    "low_stock_quantity": p.low_stock_quantity,
                }
                for p in low
            ],
        },
        "out_of_stock": {
            "count": out.count(),
            "products": [{"id": str(p.pk), "name": p.name} for p in out],
        },
        "by_category": by_category,
    }
