"""
Job specification and pricing result models.

These are plain dataclasses that live for one request:
    JSON body -> JobSpecification -> calculator -> PriceBreakdown -> Order/Receipt rows

The persisted Order and Receipt copy what they need from these, so later
catalog edits never reach an issued receipt.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple, Union

from core.money import ZERO, money_str
from modules.validation import PayloadValidator

SERVICE_PRINTING = "printing"
SERVICE_LARGE_FORMAT = "largeformat"
SERVICE_PRODUCTS = "products"
SERVICE_TYPES = (SERVICE_PRINTING, SERVICE_LARGE_FORMAT, SERVICE_PRODUCTS)

PRINT_TYPES = ("color", "mono")

DEFAULT_MAX_QUANTITY = 100000
DEFAULT_MAX_NOTES_LENGTH = 1000


@dataclass(frozen=True)
class JobSpecification:
    """
    What the customer asked for.

    Frozen: the calculator and the order service only read it.
    """

    service_type: str
    """One of 'printing', 'largeformat', 'products'."""

    quantity: int
    """Number of copies / pieces, at least 1."""

    service_name: Optional[str] = None
    """Exact catalog name for large-format and product jobs (e.g. 'Flex Banner')."""

    paper_size: Optional[str] = None
    """Paper size searched in the 'paper' category (e.g. 'A4')."""

    print_type: Optional[str] = None
    """'color' or 'mono'."""

    custom_width: Optional[Decimal] = None
    custom_height: Optional[Decimal] = None
    """Large-format dimensions; area = width × height."""

    finishing_options: Tuple[str, ...] = ()
    """Finishing identifiers searched in the 'finishing' category."""

    additional_specs: str = ""
    """Free-text notes (sanitized)."""

    payment_method: Optional[str] = None

    @classmethod
    def from_dict(
        cls,
        data: Any,
        max_quantity: int = DEFAULT_MAX_QUANTITY,
        max_notes_length: int = DEFAULT_MAX_NOTES_LENGTH,
    ) -> "JobSpecification":
        """
        Validate a request body (camelCase keys) and build a specification.

        Raises:
            ValidationError: With every field problem found
        """
        v = PayloadValidator(data)
        service_type = v.choice("serviceType", SERVICE_TYPES)
        quantity = v.integer("quantity", minimum=1, maximum=max_quantity)
        service_name = v.optional_text("serviceName", max_length=120)
        paper_size = v.optional_text("paperSize", max_length=40)
        print_type = v.choice("printType", PRINT_TYPES, required=False)
        width = v.dimension("customWidth")
        height = v.dimension("customHeight")
        finishing = v.text_list("finishingOptions")
        notes = v.optional_text("additionalSpecs", max_length=max_notes_length) or ""
        payment_method = v.optional_text("paymentMethod", max_length=40)

        if service_type in (SERVICE_LARGE_FORMAT, SERVICE_PRODUCTS) and not service_name:
            v.add_error("serviceName", f"Required for {service_type} jobs")

        v.raise_if_invalid()
        return cls(
            service_type=service_type,
            quantity=quantity,
            service_name=service_name,
            paper_size=paper_size,
            print_type=print_type,
            custom_width=width,
            custom_height=height,
            finishing_options=tuple(finishing),
            additional_specs=notes,
            payment_method=payment_method,
        )


@dataclass(frozen=True)
class LineItem:
    """One row of the itemized breakdown."""

    service: str
    quantity: Union[int, str]
    """Integer count, or a description such as '3×2 sqft × 1' for large-format."""

    unit_price: Decimal
    total: Decimal

    def to_dict(self) -> Dict[str, Any]:
        """Shape stored in Receipt.itemized_breakdown and sent to clients."""
        return {
            "service": self.service,
            "quantity": self.quantity,
            "unitPrice": money_str(self.unit_price),
            "total": money_str(self.total),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LineItem":
        return cls(
            service=data.get("service", ""),
            quantity=data.get("quantity", 0),
            unit_price=Decimal(str(data.get("unitPrice", "0"))),
            total=Decimal(str(data.get("total", "0"))),
        )


@dataclass(frozen=True)
class PriceBreakdown:
    """Calculator output: line items plus the three totals."""

    items: List[LineItem] = field(default_factory=list)
    subtotal: Decimal = ZERO
    tax: Decimal = ZERO
    total: Decimal = ZERO

    @property
    def is_empty(self) -> bool:
        return not self.items

    def to_dict(self) -> Dict[str, Any]:
        return {
            "breakdown": [item.to_dict() for item in self.items],
            "subtotal": money_str(self.subtotal),
            "tax": money_str(self.tax),
            "total": money_str(self.total),
        }
