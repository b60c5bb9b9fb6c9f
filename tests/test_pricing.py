"""
Unit tests for the catalog lookup and the order pricing calculator.

These run on in-memory CatalogItem objects; no database involved.
"""

from decimal import Decimal
from unittest.mock import patch

import pytest

from models.job import JobSpecification
from modules.pricing import CatalogItem, OrderPricingCalculator, PriceCatalog, TAX_RATE


def item(id, name, category, price, active=True):
    return CatalogItem(id=id, name=name, category=category,
                       unit_price=Decimal(price), unit="unit", active=active)


# Fixtures

@pytest.fixture
def catalog():
    """Small catalog covering every category."""
    return PriceCatalog([
        item(1, "A4 Paper", "paper", "0.50"),
        item(2, "A3 Paper", "paper", "1.00"),
        item(3, "Color printing", "printing", "0.15"),
        item(4, "Mono printing", "printing", "0.05"),
        item(5, "Binding", "finishing", "2.00"),
        item(6, "Lamination", "finishing", "1.50"),
        item(7, "Flex Banner", "largeformat", "2.00"),
        item(8, "Jotter", "products", "3.50"),
        item(9, "Sticker", "largeformat", "3.00", active=False),
    ])


@pytest.fixture
def calculator(catalog):
    return OrderPricingCalculator(catalog)


def spec(**kwargs):
    kwargs.setdefault("quantity", 1)
    return JobSpecification(**kwargs)


class TestPriceCatalog:
    """Lookup rules: category filter, substring match, lowest id wins."""

    def test_substring_match_is_case_insensitive(self, catalog):
        found = catalog.find("paper", "a4")
        assert found.id == 1

    def test_category_is_respected(self, catalog):
        assert catalog.find("finishing", "a4") is None

    def test_no_key_means_no_match(self, catalog):
        assert catalog.find("paper", None) is None
        assert catalog.find("paper", "") is None

    def test_lowest_id_wins_regardless_of_input_order(self):
        catalog = PriceCatalog([
            item(20, "Color Premium", "printing", "0.40"),
            item(10, "Color", "printing", "0.15"),
        ])
        assert catalog.find("printing", "color").id == 10

    def test_ambiguous_lookup_is_logged(self):
        catalog = PriceCatalog([
            item(1, "Color", "printing", "0.15"),
            item(2, "Color Premium", "printing", "0.40"),
        ])
        with patch("modules.pricing.logger") as mock_logger:
            catalog.find("printing", "color")
        mock_logger.warning.assert_called_once()
        assert "Ambiguous printing lookup" in mock_logger.warning.call_args[0][0]

    def test_inactive_entries_never_match(self, catalog):
        assert catalog.find("largeformat", "sticker") is None
        assert catalog.find_exact("largeformat", "Sticker") is None

    def test_find_exact_requires_full_name(self, catalog):
        assert catalog.find_exact("largeformat", "Flex") is None
        assert catalog.find_exact("largeformat", "Flex Banner").id == 7

    def test_find_conflicts_reports_overlapping_names(self):
        catalog = PriceCatalog([
            item(1, "Color", "printing", "0.15"),
            item(2, "Mono", "printing", "0.05"),
            item(3, "Color Premium", "printing", "0.40"),
            item(4, "Color", "finishing", "1.00"),
        ])
        conflicts = catalog.find_conflicts()
        assert [(a.id, b.id) for a, b in conflicts] == [(1, 3)]


class TestPrintingJobs:
    """Paper, print type and finishing lines."""

    def test_reference_example(self, calculator):
        result = calculator.calculate(
            spec(service_type="printing", paper_size="A4", print_type="color", quantity=10)
        )
        rows = [item.to_dict() for item in result.items]
        assert rows == [
            {"service": "A4 Paper", "quantity": 10, "unitPrice": "0.50", "total": "5.00"},
            {"service": "Color Printing", "quantity": 10, "unitPrice": "0.15", "total": "1.50"},
        ]
        assert result.subtotal == Decimal("6.50")
        assert result.tax == Decimal("0.65")
        assert result.total == Decimal("7.15")

    def test_mono_label(self, calculator):
        result = calculator.calculate(
            spec(service_type="printing", paper_size="A3", print_type="mono", quantity=4)
        )
        assert [i.service for i in result.items] == ["A3 Paper", "Mono Printing"]
        assert result.subtotal == Decimal("4.20")

    def test_finishing_options_priced_per_copy(self, calculator):
        result = calculator.calculate(spec(
            service_type="printing", paper_size="A4", print_type="color", quantity=3,
            finishing_options=("binding", "lamination"),
        ))
        finishing = result.items[2:]
        assert [i.service for i in finishing] == ["Binding", "Lamination"]
        assert [i.total for i in finishing] == [Decimal("6.00"), Decimal("4.50")]

    def test_unmatched_attributes_are_silently_omitted(self, calculator):
        result = calculator.calculate(spec(
            service_type="printing", paper_size="B5", print_type="color", quantity=2,
            finishing_options=("embossing",),
        ))
        assert [i.service for i in result.items] == ["Color Printing"]
        assert result.total == Decimal("0.33")

    def test_totals_invariants(self, calculator):
        result = calculator.calculate(spec(
            service_type="printing", paper_size="A3", print_type="color", quantity=7,
            finishing_options=("binding", "lamination"),
        ))
        assert result.subtotal == sum(i.total for i in result.items)
        assert result.tax == (result.subtotal * TAX_RATE).quantize(Decimal("0.01"))
        assert result.total == result.subtotal + result.tax

    def test_tax_rounds_half_up(self):
        catalog = PriceCatalog([item(1, "Mono", "printing", "0.05")])
        result = OrderPricingCalculator(catalog).calculate(
            spec(service_type="printing", print_type="mono", quantity=1)
        )
        # 0.05 * 0.10 = 0.005 -> 0.01
        assert result.tax == Decimal("0.01")
        assert result.total == Decimal("0.06")


class TestLargeFormatJobs:
    """Area-based pricing."""

    def test_reference_example(self, calculator):
        result = calculator.calculate(spec(
            service_type="largeformat", service_name="Flex Banner",
            custom_width=Decimal("3"), custom_height=Decimal("2"), quantity=1,
        ))
        (line,) = result.items
        assert line.total == Decimal("12.00")
        assert line.quantity == "3×2 sqft × 1"
        assert line.service == "Flex Banner"

    def test_line_total_is_price_times_area_times_quantity(self, calculator):
        result = calculator.calculate(spec(
            service_type="largeformat", service_name="Flex Banner",
            custom_width=Decimal("2.5"), custom_height=Decimal("4"), quantity=3,
        ))
        assert result.items[0].total == Decimal("2.00") * Decimal("2.5") * 4 * 3

    def test_missing_dimensions_price_nothing(self, calculator):
        result = calculator.calculate(spec(
            service_type="largeformat", service_name="Flex Banner",
            custom_width=Decimal("3"), quantity=1,
        ))
        assert result.is_empty
        assert result.total == Decimal("0")

    def test_name_must_match_exactly(self, calculator):
        result = calculator.calculate(spec(
            service_type="largeformat", service_name="flex banner",
            custom_width=Decimal("3"), custom_height=Decimal("2"),
        ))
        assert result.is_empty


class TestProductJobs:

    def test_product_priced_per_piece(self, calculator):
        result = calculator.calculate(spec(service_type="products", service_name="Jotter", quantity=12))
        assert result.items[0].total == Decimal("42.00")
        assert result.total == Decimal("46.20")

    def test_unknown_product_gives_empty_breakdown(self, calculator):
        result = calculator.calculate(spec(service_type="products", service_name="Calendar", quantity=5))
        assert result.is_empty
        assert result.subtotal == result.tax == result.total == Decimal("0")
