"""Price catalog entries."""

from __future__ import annotations

from typing import Any, Dict

from core.money import money_str
from models.db import Money, db

CATEGORY_PAPER = "paper"
CATEGORY_PRINTING = "printing"
CATEGORY_FINISHING = "finishing"
CATEGORY_LARGE_FORMAT = "largeformat"
CATEGORY_PRODUCTS = "products"

CATEGORIES = (
    CATEGORY_PAPER,
    CATEGORY_PRINTING,
    CATEGORY_FINISHING,
    CATEGORY_LARGE_FORMAT,
    CATEGORY_PRODUCTS,
)


class PriceListEntry(db.Model):
    """
    One priceable line in the catalog, e.g. "A4" paper at 0.50 per sheet.

    Catalog order is ascending id; lookups that match several entries take
    the lowest id.
    """

    __tablename__ = "price_lists"

    id = db.Column(db.Integer, primary_key=True)
    service_name = db.Column(db.String(120), nullable=False)
    category = db.Column(db.String(20), nullable=False, index=True)
    base_price = db.Column(Money, nullable=False)
    unit = db.Column(db.String(40), nullable=False)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "serviceName": self.service_name,
            "category": self.category,
            "basePrice": money_str(self.base_price),
            "unit": self.unit,
            "isActive": bool(self.is_active),
        }

    def __repr__(self) -> str:
        return f"<PriceListEntry {self.id} {self.category}:{self.service_name}>"
