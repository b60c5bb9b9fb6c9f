"""
Payload validation for JSON request bodies.

PayloadValidator reads fields out of a request dict, converts and checks
them, and collects every problem instead of stopping at the first one.
Call raise_if_invalid() once all fields have been read.

    v = PayloadValidator(request_json)
    name = v.required_text("serviceName", max_length=120)
    price = v.money("basePrice", minimum=Decimal("0"))
    v.raise_if_invalid()
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

import bleach

from core.exceptions import ValidationError
from core.money import to_decimal

_MISSING = object()

# Largest value a Numeric(10, 2) column holds
MAX_MONEY = Decimal("99999999.99")

# Large-format width/height, in feet
MAX_DIMENSION = Decimal("9999.99")


def sanitize_text(text: Any, max_length: Optional[int] = None) -> str:
    """Strip markup and surrounding whitespace from user text, then truncate."""
    if text is None:
        return ""
    text = str(text).strip()
    if not text:
        return ""
    text = bleach.clean(text, tags=[], strip=True)
    if max_length and len(text) > max_length:
        text = text[:max_length]
    return text


class PayloadValidator:
    """Collects field errors while reading values out of a payload dict."""

    def __init__(self, payload: Any, partial: bool = False):
        """
        Args:
            payload: Decoded JSON body (anything that is not a dict is an error)
            partial: When True, absent fields are skipped instead of
                reported as missing (used for PUT updates)
        """
        self.errors: List[Dict[str, str]] = []
        self.partial = partial
        if isinstance(payload, dict):
            self.payload = payload
        else:
            self.payload = {}
            self.add_error("body", "Request body must be a JSON object")

    # ------------------------------------------------------------------
    # Bookkeeping
    # ------------------------------------------------------------------

    def add_error(self, field: str, message: str) -> None:
        self.errors.append({"field": field, "message": message})

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def raise_if_invalid(self) -> None:
        if self.errors:
            raise ValidationError(list(self.errors))

    def present(self, field: str) -> bool:
        return field in self.payload

    def _get(self, field: str, required: bool) -> Any:
        value = self.payload.get(field, _MISSING)
        if value is None or (isinstance(value, str) and not value.strip()):
            value = _MISSING
        if value is _MISSING and required and not self.partial:
            self.add_error(field, "This field is required")
        return value

    # ------------------------------------------------------------------
    # Typed readers. Each returns None when the field is absent or invalid.
    # ------------------------------------------------------------------

    def required_text(self, field: str, max_length: int = 255) -> Optional[str]:
        value = self._get(field, required=True)
        if value is _MISSING:
            return None
        text = sanitize_text(value, max_length=max_length)
        if not text:
            self.add_error(field, "This field is required")
            return None
        return text

    def optional_text(self, field: str, max_length: int = 255) -> Optional[str]:
        value = self._get(field, required=False)
        if value is _MISSING:
            return None
        return sanitize_text(value, max_length=max_length) or None

    def choice(self, field: str, choices: Iterable[str], required: bool = True) -> Optional[str]:
        value = self._get(field, required=required)
        if value is _MISSING:
            return None
        choices = tuple(choices)
        if not isinstance(value, str) or value not in choices:
            self.add_error(field, f"Must be one of: {', '.join(choices)}")
            return None
        return value

    def integer(
        self,
        field: str,
        minimum: Optional[int] = None,
        maximum: Optional[int] = None,
        required: bool = True,
    ) -> Optional[int]:
        value = self._get(field, required=required)
        if value is _MISSING:
            return None
        if isinstance(value, bool):
            self.add_error(field, "Must be a whole number")
            return None
        try:
            number = int(str(value).strip())
        except ValueError:
            self.add_error(field, "Must be a whole number")
            return None
        if minimum is not None and number < minimum:
            self.add_error(field, f"Must be at least {minimum}")
            return None
        if maximum is not None and number > maximum:
            self.add_error(field, f"Must be at most {maximum}")
            return None
        return number

    def money(
        self,
        field: str,
        minimum: Optional[Decimal] = None,
        exclusive_minimum: bool = False,
        maximum: Decimal = MAX_MONEY,
        required: bool = True,
    ) -> Optional[Decimal]:
        """Amount with at most two decimal places that fits a Numeric(10, 2) column."""
        value = self._get(field, required=required)
        if value is _MISSING:
            return None
        return self._bounded_decimal(field, value, minimum, exclusive_minimum, maximum)

    def dimension(self, field: str, maximum: Decimal = MAX_DIMENSION) -> Optional[Decimal]:
        """Optional non-negative measurement (width/height), two decimal places at most."""
        value = self._get(field, required=False)
        if value is _MISSING:
            return None
        return self._bounded_decimal(field, value, Decimal("0"), False, maximum)

    def _bounded_decimal(
        self,
        field: str,
        value: Any,
        minimum: Optional[Decimal],
        exclusive_minimum: bool,
        maximum: Optional[Decimal],
    ) -> Optional[Decimal]:
        try:
            amount = to_decimal(value)
        except ValueError:
            self.add_error(field, "Must be a number")
            return None
        if minimum is not None:
            if exclusive_minimum and amount <= minimum:
                self.add_error(field, f"Must be greater than {minimum}")
                return None
            if not exclusive_minimum and amount < minimum:
                self.add_error(field, f"Must be at least {minimum}")
                return None
        if maximum is not None and amount > maximum:
            self.add_error(field, f"Must be at most {maximum}")
            return None
        if amount.as_tuple().exponent < -2:
            self.add_error(field, "At most two decimal places are allowed")
            return None
        return amount

    def boolean(self, field: str, default: Optional[bool] = None) -> Optional[bool]:
        value = self.payload.get(field, _MISSING)
        if value is _MISSING or value is None:
            return default
        if not isinstance(value, bool):
            self.add_error(field, "Must be true or false")
            return None
        return value

    def text_list(self, field: str, max_length: int = 60) -> List[str]:
        """List of short identifiers; duplicates dropped, order kept."""
        value = self.payload.get(field, _MISSING)
        if value is _MISSING or value is None:
            return []
        if not isinstance(value, list):
            self.add_error(field, "Must be a list of strings")
            return []
        items: List[str] = []
        for index, item in enumerate(value):
            if not isinstance(item, str):
                self.add_error(f"{field}[{index}]", "Must be a string")
                continue
            text = sanitize_text(item, max_length=max_length)
            if text and text not in items:
                items.append(text)
        return items
