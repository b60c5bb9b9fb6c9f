"""
Core module for PrintShop Desk.

Contains fundamental infrastructure components:
- exceptions: Custom exception hierarchy
- money: Decimal helpers (quantize, serialize, format)
- identifiers: Job, receipt and sale number generation
"""

from .exceptions import (
    PrintShopError,
    ValidationError,
    NotFoundError,
    PersistenceError,
    RenderError,
)
from .money import to_decimal, quantize, money_str, format_money
from .identifiers import generate_job_number, generate_receipt_number, generate_sale_number

__all__ = [
    "PrintShopError",
    "ValidationError",
    "NotFoundError",
    "PersistenceError",
    "RenderError",
    "to_decimal",
    "quantize",
    "money_str",
    "format_money",
    "generate_job_number",
    "generate_receipt_number",
    "generate_sale_number",
]
