"""Output helpers for the home affordability calculator.

This module renders an ``AffordabilityResult`` for people: currency in whole
US dollars with thousands separators, ratios as one-decimal percentages and a
check or cross next to each of the 28 % / 36 % guideline ratios. Terminal
output uses plain printing and string formatting.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict

from .data_models import AffordabilityInput, AffordabilityResult

PASS_GLYPH = "✓"
FAIL_GLYPH = "✗"

# (attribute, label) in display order
RESULT_LABELS = [
    ("max_home_price", "Maximum home price"),
    ("max_loan_amount", "Loan amount"),
    ("down_payment_amount", "Down payment"),
    ("principal_interest", "Principal & interest"),
    ("property_taxes", "Property taxes"),
    ("home_insurance", "Home insurance"),
    ("total_monthly_payment", "Total monthly payment"),
]

INPUT_LABELS = [
    ("gross_income", "Gross annual income"),
    ("monthly_debts", "Monthly debts"),
    ("down_payment_percent", "Down payment (%)"),
    ("interest_rate", "Interest rate (%)"),
    ("loan_term", "Loan term (years)"),
    ("property_tax_rate", "Property tax rate (%)"),
    ("insurance_annual", "Annual insurance"),
]


def format_currency(amount: float) -> str:
    """Format ``amount`` as whole US dollars, e.g. ``$297,629``.

    Halves round away from zero, matching browser currency formatting.
    """
    rounded = Decimal(repr(float(amount))).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    if rounded == 0:
        return "$0"
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,}"


def format_percentage(value: float) -> str:
    return f"{value:.1f}%"


def guideline_glyph(passed: bool) -> str:
    return PASS_GLYPH if passed else FAIL_GLYPH


def present_result(result: AffordabilityResult) -> Dict[str, str]:
    """Return display strings for every field of ``result``.

    Besides one key per result attribute, the mapping holds
    ``housing_guideline`` and ``dti_guideline`` glyphs.
    """
    display = {attr: format_currency(getattr(result, attr)) for attr, _ in RESULT_LABELS}
    display["dti_ratio"] = format_percentage(result.dti_ratio)
    display["housing_ratio"] = format_percentage(result.housing_ratio)
    display["housing_guideline"] = guideline_glyph(result.meets_housing_guideline)
    display["dti_guideline"] = guideline_glyph(result.meets_dti_guideline)
    return display


def print_inputs(data: AffordabilityInput) -> None:
    print("Inputs")
    print("-" * 48)
    for attr, label in INPUT_LABELS:
        print(f"{label:24s}: {getattr(data, attr):,.2f}")
    print("-" * 48)


def print_result(result: AffordabilityResult) -> None:
    """Print the payment breakdown and guideline checks."""
    display = present_result(result)
    print("Affordability")
    print("-" * 48)
    for attr, label in RESULT_LABELS:
        print(f"{label:24s}: {display[attr]:>14s}")
    print(f"{'Housing ratio (<= 28%)':24s}: {display['housing_ratio']:>14s} {display['housing_guideline']}")
    print(f"{'Debt-to-income (<= 36%)':24s}: {display['dti_ratio']:>14s} {display['dti_guideline']}")
    print("-" * 48)


def print_comparison(r1: AffordabilityResult, r2: AffordabilityResult) -> None:
    """Print two results side by side with the difference (scenario2 - scenario1)."""
    print("Comparison")
    print("=" * 72)
    print(f"{'Metric':24s} {'Scenario1':>15s} {'Scenario2':>15s} {'Difference':>15s}")
    for attr, label in RESULT_LABELS:
        v1 = getattr(r1, attr)
        v2 = getattr(r2, attr)
        print(
            f"{label:24s} {format_currency(v1):>15s} {format_currency(v2):>15s} "
            f"{format_currency(v2 - v1):>15s}"
        )
    for attr, label in (("housing_ratio", "Housing ratio"), ("dti_ratio", "Debt-to-income")):
        v1 = getattr(r1, attr)
        v2 = getattr(r2, attr)
        print(
            f"{label:24s} {format_percentage(v1):>15s} {format_percentage(v2):>15s} "
            f"{format_percentage(v2 - v1):>15s}"
        )
    print("=" * 72)
