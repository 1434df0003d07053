"""Tests for turning raw form text into calculator input."""

import pytest

from home_afford.data_models import DEFAULT_PROFILE, AffordabilityInput
from home_afford.utils import FIELD_ERROR_MESSAGE, collect_input, field_errors, parse_number


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("75000", 75000.0),
        ("75,000", 75000.0),
        (" 1,234.5 ", 1234.5),
        ("7.5", 7.5),
        (30, 30.0),
        ("", 0.0),
        ("abc", 0.0),
        ("inf", 0.0),
        ("nan", 0.0),
        (None, 0.0),
    ],
)
def test_parse_number(raw, expected):
    assert parse_number(raw) == expected


def test_parse_number_keeps_negative_values():
    # Negatives survive parsing so validation can reject them
    assert parse_number("-5") == -5.0


def test_collect_input_from_form_names():
    fields = {
        "gross-income": "90,000",
        "monthly-debts": "250",
        "down-payment-percent": "10",
        "interest-rate": "6.25",
        "loan-term": "15",
        "property-tax-rate": "0.9",
        "insurance-annual": "1,500",
    }
    assert collect_input(fields) == AffordabilityInput(
        gross_income=90000.0,
        monthly_debts=250.0,
        down_payment_percent=10.0,
        interest_rate=6.25,
        loan_term=15.0,
        property_tax_rate=0.9,
        insurance_annual=1500.0,
    )


def test_collect_input_accepts_attribute_names():
    data = collect_input({"gross_income": 50000, "interest_rate": 5})
    assert data.gross_income == 50000.0
    assert data.interest_rate == 5.0
    assert data.monthly_debts == 0.0


def test_collect_input_missing_fields_use_defaults():
    data = collect_input({"gross-income": "120000", "monthly-debts": ""}, defaults=DEFAULT_PROFILE)
    assert data.gross_income == 120000.0
    # present but blank coerces to zero rather than the default
    assert data.monthly_debts == 0.0
    assert data.interest_rate == DEFAULT_PROFILE.interest_rate
    assert data.insurance_annual == DEFAULT_PROFILE.insurance_annual


def test_field_errors_flags_bad_fields():
    fields = {name: "1" for name in (
        "gross-income",
        "monthly-debts",
        "down-payment-percent",
        "interest-rate",
        "loan-term",
        "property-tax-rate",
        "insurance-annual",
    )}
    assert field_errors(fields) == {}

    fields["monthly-debts"] = "-20"
    fields["interest-rate"] = "seven"
    del fields["loan-term"]
    assert field_errors(fields) == {
        "monthly-debts": FIELD_ERROR_MESSAGE,
        "interest-rate": FIELD_ERROR_MESSAGE,
        "loan-term": FIELD_ERROR_MESSAGE,
    }
