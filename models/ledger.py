"""
Bookkeeping records: customers and the money that moves around them.

Deposits and goodwill transactions update the running totals stored on
the customer row (total_deposits, balance, goodwill) when they are created.
"""

from __future__ import annotations

from typing import Any, Dict

from core.money import money_str
from models.db import Money, db, iso, utcnow

GOODWILL_CREDIT = "credit"
GOODWILL_DEBIT = "debit"
GOODWILL_TYPES = (GOODWILL_CREDIT, GOODWILL_DEBIT)


class Customer(db.Model):
    __tablename__ = "customers"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(160), nullable=True)
    phone = db.Column(db.String(40), nullable=True)
    company = db.Column(db.String(120), nullable=True)
    address = db.Column(db.String(255), nullable=True)
    balance = db.Column(Money, nullable=False, default=0)
    total_deposits = db.Column(Money, nullable=False, default=0)
    goodwill = db.Column(Money, nullable=False, default=0)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)

    deposits = db.relationship(
        "Deposit", back_populates="customer", cascade="all, delete-orphan"
    )
    goodwill_transactions = db.relationship(
        "GoodwillTransaction", back_populates="customer", cascade="all, delete-orphan"
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "company": self.company,
            "address": self.address,
            "balance": money_str(self.balance or 0),
            "totalDeposits": money_str(self.total_deposits or 0),
            "goodwill": money_str(self.goodwill or 0),
            "createdAt": iso(self.created_at),
        }


class Sale(db.Model):
    """Over-the-counter paper sale (no print job attached)."""

    __tablename__ = "sales"

    id = db.Column(db.Integer, primary_key=True)
    sale_number = db.Column(db.String(40), nullable=False, unique=True)
    paper_type = db.Column(db.String(60), nullable=False)
    paper_variant = db.Column(db.String(60), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    unit_price = db.Column(Money, nullable=False)
    total = db.Column(Money, nullable=False)
    payment_method = db.Column(db.String(40), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "saleNumber": self.sale_number,
            "paperType": self.paper_type,
            "paperVariant": self.paper_variant,
            "quantity": self.quantity,
            "unitPrice": money_str(self.unit_price),
            "total": money_str(self.total),
            "paymentMethod": self.payment_method,
            "createdAt": iso(self.created_at),
        }


class Deposit(db.Model):
    __tablename__ = "deposits"

    id = db.Column(db.Integer, primary_key=True)
    customer_id = db.Column(db.Integer, db.ForeignKey("customers.id"), nullable=False, index=True)
    amount = db.Column(Money, nullable=False)
    description = db.Column(db.String(255), nullable=True)
    payment_method = db.Column(db.String(40), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)

    customer = db.relationship("Customer", back_populates="deposits")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "customerId": self.customer_id,
            "amount": money_str(self.amount),
            "description": self.description,
            "paymentMethod": self.payment_method,
            "createdAt": iso(self.created_at),
        }


class GoodwillTransaction(db.Model):
    __tablename__ = "goodwill_transactions"

    id = db.Column(db.Integer, primary_key=True)
    customer_id = db.Column(db.Integer, db.ForeignKey("customers.id"), nullable=False, index=True)
    amount = db.Column(Money, nullable=False)
    reason = db.Column(db.String(255), nullable=False)
    type = db.Column(db.String(10), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)

    customer = db.relationship("Customer", back_populates="goodwill_transactions")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "customerId": self.customer_id,
            "amount": money_str(self.amount),
            "reason": self.reason,
            "type": self.type,
            "createdAt": iso(self.created_at),
        }


class Expense(db.Model):
    __tablename__ = "expenses"

    id = db.Column(db.Integer, primary_key=True)
    category = db.Column(db.String(60), nullable=False)
    description = db.Column(db.String(255), nullable=False)
    amount = db.Column(Money, nullable=False)
    payment_method = db.Column(db.String(40), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "category": self.category,
            "description": self.description,
            "amount": money_str(self.amount),
            "paymentMethod": self.payment_method,
            "createdAt": iso(self.created_at),
        }
