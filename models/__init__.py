"""
Data models for PrintShop Desk.

Two kinds of model live here:
- Request-scoped dataclasses (job.py): JobSpecification, LineItem, PriceBreakdown
- Flask-SQLAlchemy tables: PriceListEntry, Order, Receipt, Customer, Sale,
  Deposit, GoodwillTransaction, Expense

The dataclasses are frozen; the calculator only reads them.
"""

from .db import db
from .job import JobSpecification, LineItem, PriceBreakdown
from .price_list import PriceListEntry, CATEGORIES
from .order import Order, Receipt
from .ledger import Customer, Sale, Deposit, GoodwillTransaction, Expense

__all__ = [
    "db",
    # Pricing models
    "JobSpecification",
    "LineItem",
    "PriceBreakdown",
    # Tables
    "PriceListEntry",
    "CATEGORIES",
    "Order",
    "Receipt",
    "Customer",
    "Sale",
    "Deposit",
    "GoodwillTransaction",
    "Expense",
]
