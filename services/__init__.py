"""
Services layer for PrintShop Desk.

This module contains the business logic services:
- CatalogService: Price list CRUD and catalog snapshots
- OrderService: Job pricing, order + receipt creation, receipt PDFs
- LedgerService: Customers, sales, deposits, goodwill, expenses
- ReportService: Income/expense aggregation over a date range

Services are created once in create_app() and hold no per-request state;
everything they read comes from the database inside the current request.
"""

from .catalog_service import CatalogService
from .order_service import OrderService
from .ledger_service import LedgerService
from .report_service import ReportService

__all__ = [
    "CatalogService",
    "OrderService",
    "LedgerService",
    "ReportService",
]
