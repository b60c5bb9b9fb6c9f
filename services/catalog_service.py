"""
Price catalog service.

Administrative CRUD over the price list, plus the read-only PriceCatalog
snapshot that the order pricing calculator works from.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List

from core.exceptions import NotFoundError
from logging_config import get_logger
from models.db import commit_session, db
from models.price_list import CATEGORIES, PriceListEntry
from modules.pricing import PriceCatalog
from modules.validation import PayloadValidator


# Module logger
logger = get_logger(__name__)


# (service_name, category, base_price, unit)
DEFAULT_CATALOG = [
    # Paper sizes
    ("A4", "paper", "0.50", "sheet"),
    ("A3", "paper", "1.00", "sheet"),
    ("A5", "paper", "0.35", "sheet"),
    ("Letter", "paper", "0.45", "sheet"),
    ("Legal", "paper", "0.55", "sheet"),
    ("Tabloid", "paper", "1.50", "sheet"),
    # Print types
    ("Color", "printing", "0.15", "page"),
    ("Mono", "printing", "0.05", "page"),
    # Finishing options
    ("Binding", "finishing", "2.00", "job"),
    ("Lamination", "finishing", "1.50", "job"),
    ("Cutting", "finishing", "1.00", "job"),
    ("Folding", "finishing", "0.75", "job"),
    ("Stapling", "finishing", "0.50", "job"),
    ("Punching", "finishing", "0.75", "job"),
    # Large format (per square foot)
    ("Flex Banner", "largeformat", "2.00", "sqft"),
    ("Sticker", "largeformat", "3.00", "sqft"),
    ("PU (Polyurethane)", "largeformat", "4.50", "sqft"),
    ("Window Graphics", "largeformat", "5.00", "sqft"),
    # Products
    ("Jotter", "products", "3.50", "piece"),
    ("Brochure", "products", "1.20", "piece"),
]


class CatalogService:
    """Reads and edits price list entries."""

    def list_entries(self) -> List[PriceListEntry]:
        """All entries, grouped by category then name (admin listing order)."""
        return (
            PriceListEntry.query
            .order_by(PriceListEntry.category, PriceListEntry.service_name)
            .all()
        )

    def get_entry(self, entry_id: int) -> PriceListEntry:
        entry = db.session.get(PriceListEntry, entry_id)
        if entry is None:
            raise NotFoundError("Price list", entry_id)
        return entry

    def load_catalog(self) -> PriceCatalog:
        """Snapshot of the whole catalog in id order, for one pricing run."""
        entries = PriceListEntry.query.order_by(PriceListEntry.id).all()
        return PriceCatalog.from_entries(entries)

    def create_entry(self, payload: Any) -> PriceListEntry:
        values = self._validate(payload, partial=False)
        entry = PriceListEntry(**values)
        db.session.add(entry)
        commit_session("create price list")
        logger.info(f"Price list entry created: {entry.category}:{entry.service_name} @ {entry.base_price}")
        return entry

    def update_entry(self, entry_id: int, payload: Any) -> PriceListEntry:
        entry = self.get_entry(entry_id)
        values = self._validate(payload, partial=True)
        for name, value in values.items():
            setattr(entry, name, value)
        commit_session("update price list")
        logger.info(f"Price list entry {entry_id} updated: {sorted(values)}")
        return entry

    def delete_entry(self, entry_id: int) -> None:
        entry = self.get_entry(entry_id)
        db.session.delete(entry)
        commit_session("delete price list")
        logger.info(f"Price list entry {entry_id} deleted")

    def find_conflicts(self) -> List[Dict[str, Any]]:
        """Active entries whose names overlap within a category."""
        conflicts = self.load_catalog().find_conflicts()
        if conflicts:
            logger.warning(f"{len(conflicts)} overlapping catalog name pair(s) found")
        return [
            {
                "category": first.category,
                "entries": [
                    {"id": first.id, "serviceName": first.name},
                    {"id": second.id, "serviceName": second.name},
                ],
                "winner": first.id,
            }
            for first, second in conflicts
        ]

    def seed_defaults(self) -> int:
        """Replace the whole catalog with DEFAULT_CATALOG. Returns rows added."""
        PriceListEntry.query.delete()
        for name, category, price, unit in DEFAULT_CATALOG:
            db.session.add(PriceListEntry(
                service_name=name,
                category=category,
                base_price=Decimal(price),
                unit=unit,
                is_active=True,
            ))
        commit_session("seed price list")
        logger.info(f"Catalog seeded with {len(DEFAULT_CATALOG)} entries")
        return len(DEFAULT_CATALOG)

    @staticmethod
    def _validate(payload: Any, partial: bool) -> Dict[str, Any]:
        v = PayloadValidator(payload, partial=partial)
        fields = {
            "service_name": v.required_text("serviceName", max_length=120),
            "category": v.choice("category", CATEGORIES),
            "base_price": v.money("basePrice", minimum=Decimal("0")),
            "unit": v.required_text("unit", max_length=40),
            "is_active": v.boolean("isActive", default=None if partial else True),
        }
        v.raise_if_invalid()
        return {name: value for name, value in fields.items() if value is not None}
