"""
Tests for request validation, money helpers and document numbers.
"""

import re
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from core.exceptions import ValidationError
from core.identifiers import generate_job_number, generate_receipt_number, generate_sale_number
from core.money import format_money, money_str, quantize, to_decimal
from models.job import JobSpecification
from modules.validation import PayloadValidator, sanitize_text


def field_names(exc_info):
    return [e["field"] for e in exc_info.value.field_errors]


class TestJobSpecification:
    """JobSpecification.from_dict"""

    def test_printing_job(self):
        spec = JobSpecification.from_dict({
            "serviceType": "printing",
            "paperSize": "A4",
            "printType": "color",
            "quantity": "10",
            "finishingOptions": ["binding", "binding", "lamination"],
            "additionalSpecs": "  <b>rush</b> please ",
        })
        assert spec.quantity == 10
        assert spec.finishing_options == ("binding", "lamination")
        assert spec.additional_specs == "rush please"

    def test_large_format_dimensions_are_decimals(self):
        spec = JobSpecification.from_dict({
            "serviceType": "largeformat",
            "serviceName": "Flex Banner",
            "quantity": 1,
            "customWidth": 3,
            "customHeight": "2.5",
        })
        assert spec.custom_width == Decimal("3")
        assert spec.custom_height == Decimal("2.5")

    def test_collects_every_error(self):
        with pytest.raises(ValidationError) as exc_info:
            JobSpecification.from_dict({"serviceType": "engraving", "quantity": 0, "printType": "sepia"})
        assert set(field_names(exc_info)) == {"serviceType", "quantity", "printType"}

    def test_quantity_upper_bound(self):
        with pytest.raises(ValidationError) as exc_info:
            JobSpecification.from_dict(
                {"serviceType": "printing", "quantity": 11}, max_quantity=10
            )
        assert field_names(exc_info) == ["quantity"]

    def test_service_name_required_for_products(self):
        with pytest.raises(ValidationError) as exc_info:
            JobSpecification.from_dict({"serviceType": "products", "quantity": 2})
        assert field_names(exc_info) == ["serviceName"]

    def test_negative_dimension_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            JobSpecification.from_dict({
                "serviceType": "largeformat", "serviceName": "Flex Banner",
                "quantity": 1, "customWidth": -1, "customHeight": 2,
            })
        assert field_names(exc_info) == ["customWidth"]

    def test_non_object_body(self):
        with pytest.raises(ValidationError) as exc_info:
            JobSpecification.from_dict(["printing"])
        assert "body" in field_names(exc_info)

    def test_notes_truncated(self):
        spec = JobSpecification.from_dict(
            {"serviceType": "printing", "quantity": 1, "additionalSpecs": "x" * 50},
            max_notes_length=20,
        )
        assert len(spec.additional_specs) == 20


class TestPayloadValidator:

    def test_blank_strings_count_as_missing(self):
        v = PayloadValidator({"name": "   "})
        assert v.required_text("name") is None
        assert v.errors == [{"field": "name", "message": "This field is required"}]

    def test_partial_skips_missing_fields(self):
        v = PayloadValidator({}, partial=True)
        assert v.required_text("name") is None
        assert v.money("basePrice") is None
        assert v.is_valid

    def test_money_rejects_sub_cent_precision(self):
        v = PayloadValidator({"amount": "1.005"})
        assert v.money("amount") is None
        assert not v.is_valid

    def test_money_exclusive_minimum(self):
        v = PayloadValidator({"amount": 0})
        assert v.money("amount", minimum=Decimal("0"), exclusive_minimum=True) is None
        assert v.errors[0]["message"] == "Must be greater than 0"

    def test_integer_rejects_booleans(self):
        v = PayloadValidator({"quantity": True})
        assert v.integer("quantity") is None
        assert not v.is_valid

    def test_boolean_default(self):
        v = PayloadValidator({})
        assert v.boolean("isActive", default=True) is True

    def test_sanitize_text_strips_markup(self):
        assert sanitize_text("<b>Hello</b>") == "Hello"
        assert sanitize_text(None) == ""


class TestMoney:

    def test_float_input_goes_through_str(self):
        assert to_decimal(0.1) == Decimal("0.1")

    @pytest.mark.parametrize("value", [None, True, "abc", "NaN", "Infinity"])
    def test_rejects_non_numbers(self, value):
        with pytest.raises(ValueError):
            to_decimal(value)

    def test_quantize_half_up(self):
        assert quantize(Decimal("0.005")) == Decimal("0.01")
        assert quantize(Decimal("2.675")) == Decimal("2.68")

    def test_money_str(self):
        assert money_str(Decimal("7.1")) == "7.10"
        assert money_str("12") == "12.00"

    def test_format_money(self):
        assert format_money(Decimal("1234.5")) == "$1,234.50"
        assert format_money(Decimal("-17.85")) == "-$17.85"
        assert format_money("3", symbol="N") == "N3.00"


class TestIdentifiers:

    PATTERN = re.compile(r"^(JOB|RCP|SALE)-\d{14}-[0-9A-F]{10}$")

    def test_format(self):
        for number in (generate_job_number(), generate_receipt_number(), generate_sale_number()):
            assert self.PATTERN.match(number), number

    def test_timestamp_part(self):
        now = datetime(2026, 10, 19, 8, 30, 5, tzinfo=timezone.utc)
        assert generate_job_number(now).startswith("JOB-20261019083005-")

    def test_same_second_numbers_differ(self):
        now = datetime(2026, 10, 19, tzinfo=timezone.utc)
        numbers = {generate_job_number(now) for _ in range(200)}
        assert len(numbers) == 200


class TestNumericBounds:
    """Values must fit the Numeric(10, 2) columns they end up in."""

    def test_money_above_column_capacity(self):
        v = PayloadValidator({"basePrice": "1e30"})
        assert v.money("basePrice", minimum=Decimal("0")) is None
        assert v.errors == [{"field": "basePrice", "message": "Must be at most 99999999.99"}]

    def test_money_at_column_capacity(self):
        v = PayloadValidator({"amount": "99999999.99"})
        assert v.money("amount") == Decimal("99999999.99")
        assert v.is_valid

    def test_dimension_upper_bound(self):
        v = PayloadValidator({"customWidth": "10000000000000"})
        assert v.dimension("customWidth") is None
        assert v.errors[0]["message"] == "Must be at most 9999.99"

    def test_dimension_precision(self):
        v = PayloadValidator({"customWidth": "2.555", "customHeight": "2.55"})
        assert v.dimension("customWidth") is None
        assert v.dimension("customHeight") == Decimal("2.55")
        assert [e["field"] for e in v.errors] == ["customWidth"]
