"""Catalog lookup and order pricing calculator."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from core.money import money_sum, quantize
from logging_config import get_logger
from models.job import (
    SERVICE_LARGE_FORMAT,
    SERVICE_PRINTING,
    SERVICE_PRODUCTS,
    JobSpecification,
    LineItem,
    PriceBreakdown,
)
from models.price_list import (
    CATEGORY_FINISHING,
    CATEGORY_LARGE_FORMAT,
    CATEGORY_PAPER,
    CATEGORY_PRINTING,
    CATEGORY_PRODUCTS,
)

logger = get_logger(__name__)

TAX_RATE = Decimal("0.10")


@dataclass(frozen=True)
class CatalogItem:
    """Read-only copy of a price list row, taken at the start of a request."""

    id: int
    name: str
    category: str
    unit_price: Decimal
    unit: str = ""
    active: bool = True

    @classmethod
    def from_entry(cls, entry) -> "CatalogItem":
        return cls(
            id=entry.id,
            name=entry.service_name,
            category=entry.category,
            unit_price=Decimal(entry.base_price),
            unit=entry.unit,
            active=bool(entry.is_active),
        )


class PriceCatalog:
    """
    Ordered, immutable view of the price list.

    Items are kept in ascending id order. Every lookup returns the first
    active match in that order, so the lowest id wins a tie.
    """

    def __init__(self, items: Iterable[CatalogItem]):
        self._items: Tuple[CatalogItem, ...] = tuple(sorted(items, key=lambda i: i.id))

    @classmethod
    def from_entries(cls, entries) -> "PriceCatalog":
        return cls(CatalogItem.from_entry(e) for e in entries)

    def __len__(self) -> int:
        return len(self._items)

    @property
    def items(self) -> Tuple[CatalogItem, ...]:
        return self._items

    def _active(self, category: str) -> List[CatalogItem]:
        return [i for i in self._items if i.active and i.category == category]

    def matches(self, category: str, key: str) -> List[CatalogItem]:
        """All active items in category whose name contains key (case-insensitive)."""
        needle = key.lower()
        return [i for i in self._active(category) if needle in i.name.lower()]

    def find(self, category: str, key: Optional[str]) -> Optional[CatalogItem]:
        """First active item whose name contains key, or None."""
        if not key:
            return None
        found = self.matches(category, key)
        if not found:
            return None
        if len(found) > 1:
            logger.warning(
                f"Ambiguous {category} lookup for '{key}': "
                f"{[f'{i.id}:{i.name}' for i in found]}; using id {found[0].id}"
            )
        return found[0]

    def find_exact(self, category: str, name: Optional[str]) -> Optional[CatalogItem]:
        """First active item named exactly name, or None."""
        if not name:
            return None
        for item in self._active(category):
            if item.name == name:
                return item
        return None

    def find_conflicts(self) -> List[Tuple[CatalogItem, CatalogItem]]:
        """
        Pairs of active items in the same category whose names overlap.

        Either name containing the other (ignoring case) means a substring
        lookup could hit both, e.g. "Color" and "Color Premium".
        """
        conflicts = []
        for category in {i.category for i in self._items}:
            items = self._active(category)
            for index, first in enumerate(items):
                for second in items[index + 1:]:
                    a, b = first.name.lower(), second.name.lower()
                    if a in b or b in a:
                        conflicts.append((first, second))
        conflicts.sort(key=lambda pair: (pair[0].id, pair[1].id))
        return conflicts


class OrderPricingCalculator:
    """
    Turns a job specification into an itemized breakdown.

    A requested attribute with no catalog match simply contributes no line.
    """

    def __init__(self, catalog: PriceCatalog):
        self.catalog = catalog

    def calculate(self, spec: JobSpecification) -> PriceBreakdown:
        if spec.service_type == SERVICE_PRINTING:
            items = self._price_printing(spec)
        elif spec.service_type == SERVICE_LARGE_FORMAT:
            items = self._price_large_format(spec)
        elif spec.service_type == SERVICE_PRODUCTS:
            items = self._price_product(spec)
        else:
            raise ValueError(f"Unknown service type: {spec.service_type}")

        subtotal = money_sum(i.total for i in items)
        tax = quantize(subtotal * TAX_RATE)
        total = subtotal + tax

        logger.debug(
            f"Priced {spec.service_type} x{spec.quantity}: "
            f"{len(items)} line(s), subtotal={subtotal}, tax={tax}, total={total}"
        )
        return PriceBreakdown(items=items, subtotal=subtotal, tax=tax, total=total)

    def _price_printing(self, spec: JobSpecification) -> List[LineItem]:
        items: List[LineItem] = []

        paper = self.catalog.find(CATEGORY_PAPER, spec.paper_size)
        if paper:
            items.append(self._per_unit(f"{spec.paper_size} Paper", paper, spec.quantity))
        else:
            self._miss(CATEGORY_PAPER, spec.paper_size)

        print_type = self.catalog.find(CATEGORY_PRINTING, spec.print_type)
        if print_type:
            label = "Color Printing" if spec.print_type == "color" else "Mono Printing"
            items.append(self._per_unit(label, print_type, spec.quantity))
        else:
            self._miss(CATEGORY_PRINTING, spec.print_type)

        for option in spec.finishing_options:
            finishing = self.catalog.find(CATEGORY_FINISHING, option)
            if finishing:
                label = option[:1].upper() + option[1:]
                items.append(self._per_unit(label, finishing, spec.quantity))
            else:
                self._miss(CATEGORY_FINISHING, option)

        return items

    def _price_large_format(self, spec: JobSpecification) -> List[LineItem]:
        item = self.catalog.find_exact(CATEGORY_LARGE_FORMAT, spec.service_name)
        if not item:
            self._miss(CATEGORY_LARGE_FORMAT, spec.service_name)
            return []
        if not spec.custom_width or not spec.custom_height:
            logger.debug(f"Large format '{spec.service_name}' has no dimensions, not priced")
            return []

        area = spec.custom_width * spec.custom_height
        description = (
            f"{_plain(spec.custom_width)}×{_plain(spec.custom_height)} sqft × {spec.quantity}"
        )
        return [
            LineItem(
                service=spec.service_name or "Large Format",
                quantity=description,
                unit_price=item.unit_price,
                total=quantize(item.unit_price * area * spec.quantity),
            )
        ]

    def _price_product(self, spec: JobSpecification) -> List[LineItem]:
        item = self.catalog.find_exact(CATEGORY_PRODUCTS, spec.service_name)
        if not item:
            self._miss(CATEGORY_PRODUCTS, spec.service_name)
            return []
        return [self._per_unit(spec.service_name or "Product", item, spec.quantity)]

    @staticmethod
    def _per_unit(label: str, item: CatalogItem, quantity: int) -> LineItem:
        return LineItem(
            service=label,
            quantity=quantity,
            unit_price=item.unit_price,
            total=quantize(item.unit_price * quantity),
        )

    @staticmethod
    def _miss(category: str, key: Optional[str]) -> None:
        if key:
            logger.debug(f"No active {category} entry matches '{key}', line omitted")


def _plain(value: Decimal) -> str:
    """3.00 -> '3', 2.50 -> '2.5'."""
    return format(value.normalize(), "f")
