"""
Bookkeeping service: customers, sales, deposits, goodwill and expenses.

Every record is timestamped at creation. Deposits and goodwill
transactions also move the running totals on their customer, in the same
commit as the transaction row itself.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, List, Optional

from core.exceptions import NotFoundError, ValidationError
from core.identifiers import generate_sale_number
from core.money import quantize
from logging_config import get_logger
from models.db import commit_session, db
from models.job import DEFAULT_MAX_QUANTITY
from models.ledger import (
    GOODWILL_CREDIT,
    GOODWILL_TYPES,
    Customer,
    Deposit,
    Expense,
    GoodwillTransaction,
    Sale,
)
from modules.validation import MAX_MONEY, PayloadValidator


# Module logger
logger = get_logger(__name__)

_ZERO = Decimal("0")

# SQLite INTEGER range
_MAX_ID = 2 ** 63 - 1

# Customer fields that a PUT may set to null to clear them
_CUSTOMER_OPTIONAL = (
    ("email", "email", 160),
    ("phone", "phone", 40),
    ("company", "company", 120),
    ("address", "address", 255),
)


class LedgerService:
    """
    CRUD for the bookkeeping records.

    Attributes:
        max_quantity: Upper bound accepted for a counter sale quantity
    """

    def __init__(self, max_quantity: int = DEFAULT_MAX_QUANTITY):
        self.max_quantity = max_quantity

    # =========================================================================
    # CUSTOMERS
    # =========================================================================

    def list_customers(self) -> List[Customer]:
        return Customer.query.order_by(Customer.created_at.desc(), Customer.id.desc()).all()

    def get_customer(self, customer_id: int) -> Customer:
        customer = db.session.get(Customer, customer_id)
        if customer is None:
            raise NotFoundError("Customer", customer_id)
        return customer

    def create_customer(self, payload: Any) -> Customer:
        v = PayloadValidator(payload)
        customer = Customer(name=v.required_text("name", max_length=120))
        for key, attr, max_length in _CUSTOMER_OPTIONAL:
            setattr(customer, attr, v.optional_text(key, max_length=max_length))
        self._check_email(v, customer.email)
        v.raise_if_invalid()

        customer.balance = _ZERO
        customer.total_deposits = _ZERO
        customer.goodwill = _ZERO
        db.session.add(customer)
        commit_session("create customer")
        logger.info(f"Customer {customer.id} created: {customer.name}")
        return customer

    def update_customer(self, customer_id: int, payload: Any) -> Customer:
        """
        Partial update of contact details.

        Running totals (balance, totalDeposits, goodwill) are not editable
        here; they move only through deposits and goodwill transactions.
        """
        customer = self.get_customer(customer_id)
        v = PayloadValidator(payload, partial=True)
        name = v.required_text("name", max_length=120)
        updates = {}
        for key, attr, max_length in _CUSTOMER_OPTIONAL:
            if v.present(key):
                updates[attr] = v.optional_text(key, max_length=max_length)
        self._check_email(v, updates.get("email"))
        v.raise_if_invalid()

        if name is not None:
            customer.name = name
        for attr, value in updates.items():
            setattr(customer, attr, value)
        commit_session("update customer")
        logger.info(f"Customer {customer_id} updated")
        return customer

    def delete_customer(self, customer_id: int) -> None:
        """Delete a customer together with their deposits and goodwill history."""
        customer = self.get_customer(customer_id)
        db.session.delete(customer)
        commit_session("delete customer")
        logger.info(f"Customer {customer_id} deleted")

    @staticmethod
    def _check_email(v: PayloadValidator, email: Optional[str]) -> None:
        if email and ("@" not in email or email.startswith("@") or email.endswith("@")):
            v.add_error("email", "Must be a valid email address")

    # =========================================================================
    # SALES
    # =========================================================================

    def list_sales(self) -> List[Sale]:
        return Sale.query.order_by(Sale.created_at.desc(), Sale.id.desc()).all()

    def create_sale(self, payload: Any) -> Sale:
        """Record a counter sale; the total is computed here, not trusted from the client."""
        v = PayloadValidator(payload)
        paper_type = v.required_text("paperType", max_length=60)
        paper_variant = v.required_text("paperVariant", max_length=60)
        quantity = v.integer("quantity", minimum=1, maximum=self.max_quantity)
        unit_price = v.money("unitPrice", minimum=_ZERO)
        payment_method = v.optional_text("paymentMethod", max_length=40)
        v.raise_if_invalid()
        total = quantize(unit_price * quantity)
        if total > MAX_MONEY:
            raise ValidationError.single("quantity", f"Sale total would exceed {MAX_MONEY}")

        sale = Sale(
            sale_number=generate_sale_number(),
            paper_type=paper_type,
            paper_variant=paper_variant,
            quantity=quantity,
            unit_price=unit_price,
            total=total,
            payment_method=payment_method,
        )
        db.session.add(sale)
        commit_session("create sale")
        logger.info(f"Sale {sale.sale_number} recorded: {quantity} x {paper_type} = {sale.total}")
        return sale

    # =========================================================================
    # DEPOSITS
    # =========================================================================

    def list_deposits(self, customer_id: Optional[int] = None) -> List[Deposit]:
        query = Deposit.query
        if customer_id is not None:
            query = query.filter_by(customer_id=customer_id)
        return query.order_by(Deposit.created_at.desc(), Deposit.id.desc()).all()

    def create_deposit(self, payload: Any) -> Deposit:
        v = PayloadValidator(payload)
        customer = self._customer_field(v)
        amount = v.money("amount", minimum=_ZERO, exclusive_minimum=True)
        description = v.optional_text("description", max_length=255)
        payment_method = v.optional_text("paymentMethod", max_length=40)
        v.raise_if_invalid()

        deposit = Deposit(
            customer=customer,
            amount=amount,
            description=description,
            payment_method=payment_method,
        )
        customer.total_deposits = quantize(Decimal(customer.total_deposits or 0) + amount)
        customer.balance = quantize(Decimal(customer.balance or 0) + amount)
        db.session.add(deposit)
        commit_session("create deposit")
        logger.info(f"Deposit {deposit.id} of {amount} for customer {customer.id}")
        return deposit

    # =========================================================================
    # GOODWILL
    # =========================================================================

    def list_goodwill(self, customer_id: Optional[int] = None) -> List[GoodwillTransaction]:
        query = GoodwillTransaction.query
        if customer_id is not None:
            query = query.filter_by(customer_id=customer_id)
        return query.order_by(
            GoodwillTransaction.created_at.desc(), GoodwillTransaction.id.desc()
        ).all()

    def create_goodwill(self, payload: Any) -> GoodwillTransaction:
        v = PayloadValidator(payload)
        customer = self._customer_field(v)
        amount = v.money("amount", minimum=_ZERO, exclusive_minimum=True)
        reason = v.required_text("reason", max_length=255)
        kind = v.choice("type", GOODWILL_TYPES)
        v.raise_if_invalid()

        transaction = GoodwillTransaction(
            customer=customer, amount=amount, reason=reason, type=kind
        )
        delta = amount if kind == GOODWILL_CREDIT else -amount
        customer.goodwill = quantize(Decimal(customer.goodwill or 0) + delta)
        db.session.add(transaction)
        commit_session("create goodwill")
        logger.info(f"Goodwill {kind} of {amount} for customer {customer.id}: {reason}")
        return transaction

    # =========================================================================
    # EXPENSES
    # =========================================================================

    def list_expenses(self) -> List[Expense]:
        return Expense.query.order_by(Expense.created_at.desc(), Expense.id.desc()).all()

    def create_expense(self, payload: Any) -> Expense:
        v = PayloadValidator(payload)
        expense = Expense(
            category=v.required_text("category", max_length=60),
            description=v.required_text("description", max_length=255),
            amount=v.money("amount", minimum=_ZERO, exclusive_minimum=True),
            payment_method=v.required_text("paymentMethod", max_length=40),
        )
        v.raise_if_invalid()

        db.session.add(expense)
        commit_session("create expense")
        logger.info(f"Expense {expense.id} recorded: {expense.category} {expense.amount}")
        return expense

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _customer_field(self, v: PayloadValidator) -> Optional[Customer]:
        """Read customerId and resolve it; an unknown id is a field error, not a 404."""
        customer_id = v.integer("customerId", minimum=1, maximum=_MAX_ID)
        if customer_id is None:
            return None
        customer = db.session.get(Customer, customer_id)
        if customer is None:
            v.add_error("customerId", f"No customer with id {customer_id}")
        return customer

    @staticmethod
    def parse_customer_filter(value: Optional[str]) -> Optional[int]:
        """customerId query-string filter for list endpoints."""
        if value is None or value == "":
            return None
        try:
            return int(value)
        except ValueError:
            raise ValidationError.single("customerId", "Must be a whole number") from None
