"""Data models for the home affordability calculator.

This module defines the dataclasses passed into and returned from the
affordability engine: the household/loan inputs and the derived payment
breakdown. Both records are immutable and are rebuilt for every calculation,
so there is no state shared between requests.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Dict

# Thresholds used by the presenter when showing pass/fail guideline glyphs.
HOUSING_GUIDELINE_PERCENT = 28.0
DTI_GUIDELINE_PERCENT = 36.0


@dataclass(frozen=True)
class AffordabilityInput:
    """Household and loan parameters for a single calculation.

    Attributes
    ----------
    gross_income: float
        Annual gross income in currency units.
    monthly_debts: float
        Existing monthly debt obligations (car, student loans, cards).
    down_payment_percent: float
        Down payment as a percent of the home price (0-100).
    interest_rate: float
        Annual nominal interest rate in percent, e.g. ``7.5``.
    loan_term: float
        Loan term in years.
    property_tax_rate: float
        Annual property tax as a percent of the home price.
    insurance_annual: float
        Annual homeowner's insurance premium in currency units.
    """

    gross_income: float
    monthly_debts: float
    down_payment_percent: float
    interest_rate: float
    loan_term: float
    property_tax_rate: float
    insurance_annual: float

    @classmethod
    def field_names(cls) -> tuple:
        return tuple(f.name for f in fields(cls))

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class AffordabilityResult:
    """Payment breakdown for the most expensive affordable home.

    Currency values share the units of the input. Monthly amounts are
    ``principal_interest``, ``property_taxes``, ``home_insurance`` and
    ``total_monthly_payment``. The two ratios are percentages kept at full
    precision; rounding only happens when they are displayed.
    """

    max_home_price: float
    max_loan_amount: float
    down_payment_amount: float
    principal_interest: float
    property_taxes: float
    home_insurance: float
    total_monthly_payment: float
    dti_ratio: float
    housing_ratio: float

    @property
    def meets_housing_guideline(self) -> bool:
        return self.housing_ratio <= HOUSING_GUIDELINE_PERCENT

    @property
    def meets_dti_guideline(self) -> bool:
        return self.dti_ratio <= DTI_GUIDELINE_PERCENT

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


# Profile pre-populated in every form before the user edits anything.
DEFAULT_PROFILE = AffordabilityInput(
    gross_income=75000.0,
    monthly_debts=500.0,
    down_payment_percent=20.0,
    interest_rate=7.5,
    loan_term=30.0,
    property_tax_rate=1.2,
    insurance_annual=1200.0,
)
