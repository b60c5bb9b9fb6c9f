"""
Income and expense reporting.

Income is the sum of Order totals plus Sale totals created in the period;
expenses are the sum of Expense amounts. Both ends of the period are whole
days, so a weekly report for 2026-10-12..2026-10-18 covers
2026-10-12 00:00 through 2026-10-18 23:59:59.999999 UTC.
"""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Dict, Optional

from core.exceptions import ValidationError
from core.money import money_str, money_sum
from logging_config import get_logger
from models.ledger import Expense, Sale
from models.order import Order


# Module logger
logger = get_logger(__name__)


@dataclass(frozen=True)
class ReportSummary:
    start_date: date
    end_date: date
    total_income: Decimal
    total_expenses: Decimal
    order_count: int = 0
    sale_count: int = 0
    expense_count: int = 0

    @property
    def net_income(self) -> Decimal:
        return self.total_income - self.total_expenses

    def to_dict(self) -> Dict[str, Any]:
        return {
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "totalIncome": money_str(self.total_income),
            "totalExpenses": money_str(self.total_expenses),
            "netIncome": money_str(self.net_income),
            "orderCount": self.order_count,
            "saleCount": self.sale_count,
            "expenseCount": self.expense_count,
        }


# YYYY-MM-DD, optionally followed by a time part ("T10:00:00Z" or " 10:00")
_DATE_RE = re.compile(r"^(\d{4}-\d{2}-\d{2})(?:[T ].*)?$")


def _parse_date(field: str, value: Optional[str]) -> date:
    if not value:
        raise ValidationError.single(field, "This field is required")
    match = _DATE_RE.match(value.strip())
    if match is not None:
        try:
            return date.fromisoformat(match.group(1))
        except ValueError:
            pass
    raise ValidationError.single(field, "Must be a date in YYYY-MM-DD format")


class ReportService:
    """Aggregates orders, sales and expenses over a date range."""

    def summarize(self, start: date, end: date) -> ReportSummary:
        if end < start:
            raise ValidationError.single("endDate", "Must not be before startDate")

        lower = datetime.combine(start, time.min)
        upper = datetime.combine(end, time.max)

        orders = Order.query.filter(Order.created_at >= lower, Order.created_at <= upper).all()
        sales = Sale.query.filter(Sale.created_at >= lower, Sale.created_at <= upper).all()
        expenses = Expense.query.filter(Expense.created_at >= lower, Expense.created_at <= upper).all()

        income = money_sum([Decimal(o.total) for o in orders] + [Decimal(s.total) for s in sales])
        spent = money_sum(Decimal(e.amount) for e in expenses)

        summary = ReportSummary(
            start_date=start,
            end_date=end,
            total_income=income,
            total_expenses=spent,
            order_count=len(orders),
            sale_count=len(sales),
            expense_count=len(expenses),
        )
        logger.info(
            f"Report {start}..{end}: income={summary.total_income} "
            f"expenses={summary.total_expenses} net={summary.net_income}"
        )
        return summary

    def weekly(self, start_value: Optional[str], end_value: Optional[str]) -> ReportSummary:
        """Report for startDate..endDate query-string values (inclusive)."""
        errors = []
        start = end = None
        for field, value in (("startDate", start_value), ("endDate", end_value)):
            try:
                parsed = _parse_date(field, value)
            except ValidationError as e:
                errors.extend(e.field_errors)
                continue
            if field == "startDate":
                start = parsed
            else:
                end = parsed
        if errors:
            raise ValidationError(errors)
        return self.summarize(start, end)

    def monthly(self, year_value: Optional[str], month_value: Optional[str]) -> ReportSummary:
        """Report for a whole calendar month."""
        errors = []
        year = month = None
        try:
            year = int(year_value)
            if not 1900 <= year <= 9999:
                raise ValueError
        except (TypeError, ValueError):
            errors.append({"field": "year", "message": "Must be a year between 1900 and 9999"})
        try:
            month = int(month_value)
            if not 1 <= month <= 12:
                raise ValueError
        except (TypeError, ValueError):
            errors.append({"field": "month", "message": "Must be a month number 1-12"})
        if errors:
            raise ValidationError(errors)

        last_day = calendar.monthrange(year, month)[1]
        return self.summarize(date(year, month, 1), date(year, month, last_day))

    @staticmethod
    def month_label(summary: ReportSummary) -> str:
        return f"{calendar.month_name[summary.start_date.month]} {summary.start_date.year}"

    @staticmethod
    def period_label(summary: ReportSummary) -> str:
        return f"Period: {summary.start_date.isoformat()} - {summary.end_date.isoformat()}"
