"""Core calculation engine for the home affordability calculator.

This module works out the most expensive home a household can carry under
the conventional 28/36 underwriting guidelines. The monthly budget is the
smaller of 28 % of gross monthly income (housing cap) and 36 % of gross
monthly income minus existing debts (total debt cap). After insurance is
taken out, the remaining budget is treated as a principal and interest
payment and solved backwards into a loan amount, then grossed up by the down
payment into a home price. The payment breakdown and ratios are then
recomputed forwards from that price.

Everything here is a pure function of its arguments. Failures are signalled
by raising a subclass of ``AffordabilityError``.
"""

from __future__ import annotations

import logging
import math

from .data_models import AffordabilityInput, AffordabilityResult

logger = logging.getLogger(__name__)

HOUSING_RATIO_LIMIT = 0.28  # front-end: housing payment / gross income
DTI_RATIO_LIMIT = 0.36  # back-end: all debt payments / gross income


class AffordabilityError(ValueError):
    """Base class for calculations that cannot produce a result."""

    kind = "affordability_error"
    default_message = "Unable to calculate affordability."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class InvalidInput(AffordabilityError):
    """A field is negative, NaN or infinite."""

    kind = "invalid_input"
    default_message = "Please enter a valid positive number."


class DegenerateInput(AffordabilityError):
    """Income, interest rate or loan term is zero.

    Not a user-facing failure: there is simply not enough information yet,
    and callers should withhold results rather than show an error.
    """

    kind = "degenerate_input"
    default_message = "Income, interest rate and loan term are required."


class DebtTooHigh(AffordabilityError):
    """Existing obligations leave no room in the debt-to-income budget."""

    kind = "debt_too_high"
    default_message = "Your monthly debt payments are too high for a mortgage."


class InvalidDownPayment(AffordabilityError):
    """A down payment of 100 % or more leaves nothing to finance."""

    kind = "invalid_down_payment"
    default_message = "Down payment must be less than 100% of the home price."


def validate(data: AffordabilityInput) -> bool:
    """Return True if every field is a finite number greater than or equal to zero.

    Zero passes this check; whether zero income, rate or term allows a
    calculation is decided separately by :func:`calculate`.
    """
    for name in AffordabilityInput.field_names():
        value = getattr(data, name)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        if not math.isfinite(value) or value < 0:
            return False
    return True


def _growth_factor(monthly_rate: float, num_payments: float):
    """Return ``(1 + i)^n``, or None when it exceeds the float range."""
    try:
        return (1 + monthly_rate) ** num_payments
    except OverflowError:
        return None


def monthly_payment(principal: float, annual_rate: float, years: float) -> float:
    """Return the fixed monthly payment that amortizes ``principal``.

    The formula is:

        payment = P * (i * (1 + i)^n) / ((1 + i)^n - 1)

    where ``P`` is the principal, ``i`` is the monthly interest rate and
    ``n`` is the number of payments. When the interest rate is zero, or so
    small that ``1 + i`` rounds to 1, the payment simplifies to ``P / n``.
    For terms long enough that ``(1 + i)^n`` overflows, the equivalent
    ``P * i / (1 - (1 + i)^-n)`` is used, which tends to interest only.
    """
    num_payments = years * 12
    if num_payments <= 0:
        raise ValueError("Term must be positive")
    monthly_rate = annual_rate / 100 / 12
    if monthly_rate == 0:
        return principal / num_payments
    factor = _growth_factor(monthly_rate, num_payments)
    if factor is None:
        return principal * monthly_rate / (1 - (1 + monthly_rate) ** -num_payments)
    if factor == 1:
        return principal / num_payments
    return principal * (monthly_rate * factor) / (factor - 1)


def max_loan_for_payment(payment: float, annual_rate: float, years: float) -> float:
    """Return the largest principal a fixed monthly ``payment`` can amortize.

    This is the present value of an annuity, the inverse of
    :func:`monthly_payment`:

        principal = A * ((1 + i)^n - 1) / (i * (1 + i)^n)

    The same degenerate cases apply: ``A * n`` when ``1 + i`` rounds to 1,
    and ``A * (1 - (1 + i)^-n) / i`` when ``(1 + i)^n`` overflows.
    """
    num_payments = years * 12
    if num_payments <= 0:
        raise ValueError("Term must be positive")
    monthly_rate = annual_rate / 100 / 12
    if monthly_rate > 0:
        factor = _growth_factor(monthly_rate, num_payments)
        if factor is None:
            return payment * ((1 - (1 + monthly_rate) ** -num_payments) / monthly_rate)
        if factor != 1:
            return payment * ((factor - 1) / (monthly_rate * factor))
    return payment * num_payments


def calculate(data: AffordabilityInput) -> AffordabilityResult:
    """Compute the maximum affordable home price and its payment breakdown.

    Parameters
    ----------
    data: AffordabilityInput
        Household and loan parameters. Every field must pass :func:`validate`.

    Returns
    -------
    AffordabilityResult
        Home price, loan and down payment, the monthly payment components and
        the resulting debt-to-income and housing ratios.

    Raises
    ------
    InvalidInput
        If any field is negative or not finite.
    DegenerateInput
        If gross income, interest rate or loan term is zero.
    DebtTooHigh
        If existing debts (or insurance) consume the whole payment budget.
    InvalidDownPayment
        If the down payment is 100 % of the price or more.
    """
    if not validate(data):
        raise InvalidInput()
    if data.gross_income == 0 or data.interest_rate == 0 or data.loan_term == 0:
        raise DegenerateInput()

    monthly_income = data.gross_income / 12
    max_housing_payment = monthly_income * HOUSING_RATIO_LIMIT
    max_total_debt_payment = monthly_income * DTI_RATIO_LIMIT
    max_mortgage_payment = max_total_debt_payment - data.monthly_debts

    # The tighter of the two guidelines binds
    max_monthly_payment = min(max_housing_payment, max_mortgage_payment)
    logger.debug(
        "Payment caps: housing=%.2f mortgage=%.2f binding=%.2f",
        max_housing_payment,
        max_mortgage_payment,
        max_monthly_payment,
    )
    if max_monthly_payment <= 0:
        logger.info("Refusing calculation: debts %.2f exceed DTI budget", data.monthly_debts)
        raise DebtTooHigh()

    monthly_insurance = data.insurance_annual / 12
    # Property tax depends on the unknown price, so only insurance comes out here
    max_principal_interest = max_monthly_payment - monthly_insurance
    if max_principal_interest < 0:
        logger.info("Refusing calculation: insurance %.2f/month exceeds budget", monthly_insurance)
        raise DebtTooHigh(
            "Your insurance and debt payments leave no room for a mortgage payment."
        )

    max_loan_amount = max_loan_for_payment(
        max_principal_interest, data.interest_rate, data.loan_term
    )

    if data.down_payment_percent >= 100:
        raise InvalidDownPayment()
    down_payment_share = data.down_payment_percent / 100
    financed_share = 1 - down_payment_share
    # Approximation: the price ignores the property tax it will itself incur
    max_home_price = max_loan_amount / financed_share

    actual_loan_amount = max_home_price * financed_share
    actual_principal_interest = monthly_payment(
        actual_loan_amount, data.interest_rate, data.loan_term
    )
    actual_property_tax = (max_home_price * data.property_tax_rate / 100) / 12
    actual_insurance = data.insurance_annual / 12
    actual_total_payment = actual_principal_interest + actual_property_tax + actual_insurance

    dti_ratio = (data.monthly_debts + actual_total_payment) / monthly_income * 100
    housing_ratio = actual_total_payment / monthly_income * 100
    logger.debug(
        "Max price %.2f, loan %.2f, total payment %.2f", max_home_price, actual_loan_amount,
        actual_total_payment,
    )

    return AffordabilityResult(
        max_home_price=max_home_price,
        max_loan_amount=actual_loan_amount,
        down_payment_amount=max_home_price * down_payment_share,
        principal_interest=actual_principal_interest,
        property_taxes=actual_property_tax,
        home_insurance=actual_insurance,
        total_monthly_payment=actual_total_payment,
        dti_ratio=dti_ratio,
        housing_ratio=housing_ratio,
    )
