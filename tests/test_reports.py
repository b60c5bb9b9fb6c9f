"""
Tests for weekly and monthly income/expense reports.
"""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from core.exceptions import ValidationError
from models.db import db
from models.ledger import Expense, Sale
from services.report_service import ReportService


def today():
    return datetime.now(timezone.utc).date()


def week_query(start, end):
    return f"startDate={start.isoformat()}&endDate={end.isoformat()}"


# Fixtures

@pytest.fixture
def activity(seeded_client):
    """One 7.15 order and one 25.00 expense, both recorded now."""
    seeded_client.post("/api/orders", json={
        "serviceType": "printing", "paperSize": "A4", "printType": "color", "quantity": 10,
    })
    seeded_client.post("/api/expenses", json={
        "category": "Supplies", "description": "Toner", "amount": "25.00", "paymentMethod": "cash",
    })
    return seeded_client


class TestWeeklyReport:

    def test_income_minus_expenses(self, activity):
        start, end = today() - timedelta(days=1), today() + timedelta(days=1)
        report = activity.get(f"/api/reports/weekly?{week_query(start, end)}").get_json()
        assert report["totalIncome"] == "7.15"
        assert report["totalExpenses"] == "25.00"
        assert report["netIncome"] == "-17.85"
        assert report["orderCount"] == 1
        assert report["expenseCount"] == 1

    def test_sales_count_as_income(self, activity):
        activity.post("/api/sales", json={
            "paperType": "A4", "paperVariant": "plain", "quantity": 10, "unitPrice": "0.50",
        })
        report = activity.get(f"/api/reports/weekly?{week_query(today(), today())}").get_json()
        assert report["totalIncome"] == "12.15"
        assert report["saleCount"] == 1

    def test_range_outside_activity_is_zero(self, activity):
        start = today() - timedelta(days=30)
        report = activity.get(
            f"/api/reports/weekly?{week_query(start, start + timedelta(days=6))}"
        ).get_json()
        assert report["totalIncome"] == "0.00"
        assert report["netIncome"] == "0.00"

    def test_full_timestamps_accepted(self, activity):
        stamp = f"{today().isoformat()}T00:00:00.000Z"
        response = activity.get(f"/api/reports/weekly?startDate={stamp}&endDate={stamp}")
        assert response.status_code == 200

    def test_missing_dates(self, client):
        response = client.get("/api/reports/weekly")
        assert response.status_code == 400
        assert {e["field"] for e in response.get_json()["fields"]} == {"startDate", "endDate"}

    def test_end_before_start(self, client):
        response = client.get("/api/reports/weekly?startDate=2026-10-19&endDate=2026-10-12")
        assert response.status_code == 400


class TestMonthlyReport:

    def test_current_month(self, activity):
        now = today()
        report = activity.get(f"/api/reports/monthly?year={now.year}&month={now.month}").get_json()
        assert report["startDate"] == date(now.year, now.month, 1).isoformat()
        assert report["netIncome"] == "-17.85"

    @pytest.mark.parametrize("query", ["year=2026&month=13", "year=abc&month=1", "month=2"])
    def test_bad_parameters(self, client, query):
        assert client.get(f"/api/reports/monthly?{query}").status_code == 400


class TestReportService:
    """Boundaries checked directly against stored timestamps."""

    def test_whole_days_are_inclusive(self, app_ctx):
        db.session.add_all([
            Expense(category="Rent", description="in", amount=Decimal("10.00"),
                    payment_method="cash", created_at=datetime(2026, 2, 28, 23, 59, 59)),
            Expense(category="Rent", description="out", amount=Decimal("99.00"),
                    payment_method="cash", created_at=datetime(2026, 3, 1, 0, 0, 0)),
            Sale(sale_number="SALE-1", paper_type="A4", paper_variant="plain", quantity=1,
                 unit_price=Decimal("2.00"), total=Decimal("2.00"),
                 created_at=datetime(2026, 2, 1, 0, 0, 0)),
        ])
        db.session.commit()

        summary = ReportService().monthly("2026", "2")
        assert summary.end_date == date(2026, 2, 28)
        assert summary.total_expenses == Decimal("10.00")
        assert summary.total_income == Decimal("2.00")
        assert summary.net_income == Decimal("-8.00")

    def test_month_label(self, app_ctx):
        summary = ReportService().monthly("2026", "10")
        assert ReportService.month_label(summary) == "October 2026"

    def test_invalid_date_format(self, app_ctx):
        with pytest.raises(ValidationError) as exc_info:
            ReportService().weekly("19/10/2026", "2026-10-25")
        assert exc_info.value.field_errors[0]["field"] == "startDate"


class TestDateEdges:

    def test_last_representable_month(self, client):
        response = client.get("/api/reports/monthly?year=9999&month=12")
        assert response.status_code == 200
        assert response.get_json()["endDate"] == "9999-12-31"

    def test_last_representable_day(self, client):
        response = client.get("/api/reports/weekly?startDate=9999-12-25&endDate=9999-12-31")
        assert response.status_code == 200

    @pytest.mark.parametrize("value", ["2026-10-19xyz", "2026-10-19Z", "2026-1-19", "2026-02-30"])
    def test_malformed_dates_rejected(self, app_ctx, value):
        with pytest.raises(ValidationError) as exc_info:
            ReportService().weekly(value, "2026-10-25")
        assert exc_info.value.field_errors[0]["field"] == "startDate"

    @pytest.mark.parametrize("value", ["2026-10-19", "2026-10-19T08:00:00Z", "2026-10-19 08:00"])
    def test_time_part_ignored(self, app_ctx, value):
        summary = ReportService().weekly(value, value)
        assert summary.start_date == date(2026, 10, 19)

    def test_end_of_day_included(self, app_ctx):
        db.session.add(Expense(category="Rent", description="late", amount=Decimal("4.00"),
                               payment_method="cash",
                               created_at=datetime(2026, 10, 18, 23, 59, 59, 999999)))
        db.session.commit()
        summary = ReportService().weekly("2026-10-12", "2026-10-18")
        assert summary.total_expenses == Decimal("4.00")
