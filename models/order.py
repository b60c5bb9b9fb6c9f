"""
Order and receipt records.

An Order is written once, when the job is priced, and never recalculated.
Its Receipt repeats the totals and stores the itemized breakdown as JSON so
that the receipt reads the same no matter what happens to the catalog later.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List

from core.money import money_str
from models.db import Money, db, iso, utcnow
from models.job import LineItem


class Order(db.Model):
    """A priced print job."""

    __tablename__ = "orders"

    id = db.Column(db.Integer, primary_key=True)
    job_number = db.Column(db.String(40), nullable=False, unique=True)

    # Job specification
    service_type = db.Column(db.String(20), nullable=False, default="printing")
    service_name = db.Column(db.String(120), nullable=True)
    paper_size = db.Column(db.String(40), nullable=True)
    quantity = db.Column(db.Integer, nullable=False)
    print_type = db.Column(db.String(10), nullable=True)
    custom_width = db.Column(Money, nullable=True)
    custom_height = db.Column(Money, nullable=True)
    finishing_options = db.Column(db.JSON, nullable=False, default=list)
    additional_specs = db.Column(db.Text, nullable=True)
    payment_method = db.Column(db.String(40), nullable=True)

    # Computed totals
    subtotal = db.Column(Money, nullable=False)
    tax = db.Column(Money, nullable=False)
    total = db.Column(Money, nullable=False)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)

    receipt = db.relationship("Receipt", back_populates="order", uselist=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "jobNumber": self.job_number,
            "serviceType": self.service_type,
            "serviceName": self.service_name,
            "paperSize": self.paper_size,
            "quantity": self.quantity,
            "printType": self.print_type,
            "customWidth": money_str(self.custom_width) if self.custom_width is not None else None,
            "customHeight": money_str(self.custom_height) if self.custom_height is not None else None,
            "finishingOptions": list(self.finishing_options or []),
            "additionalSpecs": self.additional_specs or "",
            "paymentMethod": self.payment_method,
            "subtotal": money_str(self.subtotal),
            "tax": money_str(self.tax),
            "total": money_str(self.total),
            "createdAt": iso(self.created_at),
        }


class Receipt(db.Model):
    """Point-in-time snapshot of an order's pricing."""

    __tablename__ = "receipts"

    id = db.Column(db.Integer, primary_key=True)
    receipt_number = db.Column(db.String(40), nullable=False, unique=True)
    order_id = db.Column(db.Integer, db.ForeignKey("orders.id"), nullable=False, unique=True)
    itemized_breakdown = db.Column(db.Text, nullable=False)
    subtotal = db.Column(Money, nullable=False)
    tax = db.Column(Money, nullable=False)
    total = db.Column(Money, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    order = db.relationship("Order", back_populates="receipt")

    @staticmethod
    def serialize_breakdown(items: List[LineItem]) -> str:
        return json.dumps([item.to_dict() for item in items])

    @property
    def line_items(self) -> List[LineItem]:
        """Decoded breakdown. Raises ValueError on corrupt JSON."""
        return [LineItem.from_dict(row) for row in json.loads(self.itemized_breakdown)]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "receiptNumber": self.receipt_number,
            "orderId": self.order_id,
            "itemizedBreakdown": self.itemized_breakdown,
            "subtotal": money_str(self.subtotal),
            "tax": money_str(self.tax),
            "total": money_str(self.total),
            "createdAt": iso(self.created_at),
        }
