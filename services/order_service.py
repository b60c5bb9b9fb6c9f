"""
Order creation and receipt service.

Flow for POST /api/orders:
    1. Validate the request body into a JobSpecification
    2. Take a PriceCatalog snapshot (one query, at the start of the request)
    3. Run the OrderPricingCalculator over it
    4. Generate job and receipt numbers
    5. Add the Order and its Receipt to one session and commit once

The receipt stores the breakdown JSON and repeats the totals, so it is a
snapshot: later catalog edits or deletions never change it. Nothing here
updates an order after it is created.
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from core.exceptions import NotFoundError, RenderError, ValidationError
from core.identifiers import generate_job_number, generate_receipt_number
from logging_config import get_logger, get_order_logger
from models.db import commit_session, db
from models.job import (
    DEFAULT_MAX_NOTES_LENGTH,
    DEFAULT_MAX_QUANTITY,
    JobSpecification,
    PriceBreakdown,
)
from models.order import Order, Receipt
from modules.pdf_render import Letterhead, build_receipt_pdf_bytes
from modules.pricing import OrderPricingCalculator
from modules.validation import MAX_MONEY
from services.catalog_service import CatalogService


# Module logger
logger = get_logger(__name__)


class OrderService:
    """
    Prices and records print jobs.

    Attributes:
        max_quantity: Upper bound accepted for JobSpecification.quantity
        max_notes_length: Truncation length for additionalSpecs
    """

    def __init__(
        self,
        catalog_service: Optional[CatalogService] = None,
        max_quantity: int = DEFAULT_MAX_QUANTITY,
        max_notes_length: int = DEFAULT_MAX_NOTES_LENGTH,
    ):
        self.catalog_service = catalog_service or CatalogService()
        self.max_quantity = max_quantity
        self.max_notes_length = max_notes_length

    def parse_specification(self, payload: Any) -> JobSpecification:
        return JobSpecification.from_dict(
            payload,
            max_quantity=self.max_quantity,
            max_notes_length=self.max_notes_length,
        )

    def quote(self, payload: Any) -> PriceBreakdown:
        """Price a job without recording anything."""
        spec = self.parse_specification(payload)
        calculator = OrderPricingCalculator(self.catalog_service.load_catalog())
        return calculator.calculate(spec)

    def create_order(self, payload: Any) -> Order:
        """
        Validate, price and persist a job together with its receipt.

        Raises:
            ValidationError: Body failed validation, or the total does not
                fit a money column (nothing written)
            PersistenceError: Store rejected the write (session rolled back)
        """
        spec = self.parse_specification(payload)
        catalog = self.catalog_service.load_catalog()
        breakdown = OrderPricingCalculator(catalog).calculate(spec)
        if breakdown.total > MAX_MONEY:
            raise ValidationError.single("quantity", f"Order total would exceed {MAX_MONEY}")

        job_number = generate_job_number()
        order_logger = get_order_logger(job_number)

        order = Order(
            job_number=job_number,
            service_type=spec.service_type,
            service_name=spec.service_name,
            paper_size=spec.paper_size,
            quantity=spec.quantity,
            print_type=spec.print_type,
            custom_width=spec.custom_width,
            custom_height=spec.custom_height,
            finishing_options=list(spec.finishing_options),
            additional_specs=spec.additional_specs,
            payment_method=spec.payment_method,
            subtotal=breakdown.subtotal,
            tax=breakdown.tax,
            total=breakdown.total,
        )
        receipt = Receipt(
            receipt_number=generate_receipt_number(),
            order=order,
            itemized_breakdown=Receipt.serialize_breakdown(breakdown.items),
            subtotal=breakdown.subtotal,
            tax=breakdown.tax,
            total=breakdown.total,
        )
        db.session.add(order)
        db.session.add(receipt)
        commit_session("create order")

        if breakdown.is_empty:
            order_logger.warning("Order created with no matched catalog entries (total 0.00)")
        order_logger.info(
            f"Order {order.id} created: {spec.service_type} x{spec.quantity}, "
            f"{len(breakdown.items)} line(s), total={breakdown.total}, receipt={receipt.receipt_number}"
        )
        return order

    def list_orders(self) -> List[Order]:
        return Order.query.order_by(Order.created_at.desc(), Order.id.desc()).all()

    def get_order(self, order_id: int) -> Order:
        order = db.session.get(Order, order_id)
        if order is None:
            raise NotFoundError("Order", order_id)
        return order

    def get_receipt(self, order_id: int) -> Receipt:
        receipt = Receipt.query.filter_by(order_id=order_id).first()
        if receipt is None:
            raise NotFoundError("Receipt", order_id)
        return receipt

    def render_receipt_pdf(self, order_id: int, letterhead: Letterhead) -> Tuple[str, bytes]:
        """
        Render the stored receipt snapshot.

        Returns:
            (download filename, PDF bytes)

        Raises:
            NotFoundError: Unknown order, or order without receipt
            RenderError: Corrupt breakdown or ReportLab failure
        """
        order = self.get_order(order_id)
        receipt = self.get_receipt(order_id)
        try:
            items = receipt.line_items
            pdf = build_receipt_pdf_bytes(order.to_dict(), receipt.to_dict(), items, letterhead)
        except Exception as e:
            logger.error(f"Receipt PDF for order {order_id} failed: {e}", exc_info=True)
            raise RenderError("receipt", e) from e
        return f"Receipt-{receipt.receipt_number}.pdf", pdf
