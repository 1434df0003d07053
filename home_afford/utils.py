"""Utility functions for the home affordability calculator.

This module turns raw form text into the numeric input record used by the
engine. Numbers may carry comma thousands separators ("75,000"). Blank or
unparsable entries are coerced to zero before validation, so the engine never
sees raw text.
"""

from __future__ import annotations

import math
from typing import Dict, Mapping, Optional

from .data_models import AffordabilityInput

# Form field ids, in display order, mapped to the input record attributes.
FORM_FIELDS: Dict[str, str] = {
    "gross-income": "gross_income",
    "monthly-debts": "monthly_debts",
    "down-payment-percent": "down_payment_percent",
    "interest-rate": "interest_rate",
    "loan-term": "loan_term",
    "property-tax-rate": "property_tax_rate",
    "insurance-annual": "insurance_annual",
}

FIELD_ERROR_MESSAGE = "Please enter a valid positive number"


def _to_float(value: object) -> Optional[float]:
    """Convert ``value`` to a finite float, or return None if it is not one."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        cleaned = str(value).strip().replace(",", "")
        try:
            number = float(cleaned)
        except ValueError:
            return None
    if not math.isfinite(number):
        return None
    return number


def parse_number(value: object) -> float:
    """Parse a locale-formatted number, returning 0.0 for anything unusable.

    Commas are treated as thousands separators and stripped. Empty strings,
    garbage and non-finite values all become ``0.0``.
    """
    number = _to_float(value)
    return 0.0 if number is None else number


def _raw_value(fields: Mapping[str, object], form_name: str, attr: str) -> object:
    if form_name in fields:
        return fields[form_name]
    return fields.get(attr)


def collect_input(
    fields: Mapping[str, object], defaults: Optional[AffordabilityInput] = None
) -> AffordabilityInput:
    """Build an ``AffordabilityInput`` from a mapping of raw field values.

    Keys may be the hyphenated form ids (``"gross-income"``) or the record
    attribute names (``"gross_income"``). Keys that are missing altogether
    take their value from ``defaults`` when supplied; present but blank or
    invalid values become zero.
    """
    values: Dict[str, float] = {}
    for form_name, attr in FORM_FIELDS.items():
        raw = _raw_value(fields, form_name, attr)
        if raw is None and defaults is not None:
            values[attr] = getattr(defaults, attr)
        else:
            values[attr] = parse_number(raw)
    return AffordabilityInput(**values)


def field_errors(fields: Mapping[str, object]) -> Dict[str, str]:
    """Return a message per form field whose raw value is not a number >= 0.

    Missing fields are reported too, since the form requires all seven.
    """
    errors: Dict[str, str] = {}
    for form_name, attr in FORM_FIELDS.items():
        number = _to_float(_raw_value(fields, form_name, attr))
        if number is None or number < 0:
            errors[form_name] = FIELD_ERROR_MESSAGE
    return errors
