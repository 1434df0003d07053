"""Command‑line interface for the home affordability calculator.

This module uses the ``click`` library to implement a multi‑command
interface. Users can compute how much home they can afford, print the default
profile, or compare two scenarios. Results can be printed to the terminal or
exported to a JSON file.
"""

from __future__ import annotations

import json
import logging
import shlex
from pathlib import Path
from typing import Any, Dict, Optional

import click

from .data_models import DEFAULT_PROFILE, AffordabilityInput, AffordabilityResult
from .engine import AffordabilityError, DegenerateInput, calculate
from .formatter import present_result, print_comparison, print_inputs, print_result

logger = logging.getLogger(__name__)

NOT_ENOUGH_INFORMATION = (
    "Not enough information to estimate affordability: income, interest rate "
    "and loan term must all be greater than zero."
)


def parse_amount(value: str) -> float:
    """Parse a currency amount with optional suffixes.

    Accepts plain numbers ("75000"), comma separated thousands ("75,000") and
    shorthand with ``k``/``m`` suffixes (e.g. "75k" meaning 75_000).
    """
    value = str(value).strip().lower().replace(",", "").lstrip("$")
    factor = 1.0
    if value.endswith("k"):
        factor = 1_000.0
        value = value[:-1]
    elif value.endswith("m"):
        factor = 1_000_000.0
        value = value[:-1]
    try:
        amount = float(value) * factor
    except ValueError:
        raise click.BadParameter(f"Invalid amount: {value}")
    if amount < 0:
        raise click.BadParameter(f"Amount must not be negative: {value}")
    return amount


def parse_percent(value: str) -> float:
    """Parse a percentage such as "20" or "20%" (values stay in 0-100 units)."""
    value = str(value).strip()
    if value.endswith("%"):
        value = value[:-1]
    try:
        p = float(value)
    except ValueError:
        raise click.BadParameter(f"Invalid percentage: {value}")
    if p < 0:
        raise click.BadParameter(f"Percentage must not be negative: {value}")
    return p


def parse_years(value: str) -> float:
    """Parse a loan term in years, e.g. "30"."""
    try:
        years = float(str(value).strip())
    except ValueError:
        raise click.BadParameter(f"Invalid loan term: {value}")
    if years < 0:
        raise click.BadParameter(f"Loan term must not be negative: {value}")
    return years


def build_input_from_options(
    income: str,
    debts: str,
    down_payment: str,
    rate: str,
    term: str,
    tax_rate: str,
    insurance: str,
) -> AffordabilityInput:
    return AffordabilityInput(
        gross_income=parse_amount(income),
        monthly_debts=parse_amount(debts),
        down_payment_percent=parse_percent(down_payment),
        interest_rate=parse_percent(rate),
        loan_term=parse_years(term),
        property_tax_rate=parse_percent(tax_rate),
        insurance_annual=parse_amount(insurance),
    )


def run_calculation(data: AffordabilityInput) -> Optional[AffordabilityResult]:
    """Calculate ``data``, converting engine errors for the terminal.

    Returns None when the inputs are degenerate (zero income, rate or term);
    other affordability errors become a ``click.ClickException``.
    """
    try:
        return calculate(data)
    except DegenerateInput:
        click.echo(NOT_ENOUGH_INFORMATION)
        return None
    except AffordabilityError as exc:
        logger.debug("Calculation refused: %s", exc.kind)
        raise click.ClickException(exc.message)


def export_to_json(path: Path, data: AffordabilityInput, result: AffordabilityResult) -> None:
    """Export the inputs, raw result and display strings to a JSON file."""
    payload = {
        "input": data.to_dict(),
        "result": result.to_dict(),
        "display": present_result(result),
    }
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)


def _profile_option(name: str, attr: str, help_text: str):
    default = getattr(DEFAULT_PROFILE, attr)
    return click.option(name, attr, default=f"{default:g}", show_default=True, help=help_text)


def input_options(func):
    """Attach the seven input options, defaulting to the default profile."""
    options = [
        _profile_option("--income", "gross_income", "Gross annual income"),
        _profile_option("--debts", "monthly_debts", "Monthly debt payments"),
        _profile_option("--down-payment", "down_payment_percent", "Down payment (percent of price)"),
        _profile_option("--rate", "interest_rate", "Annual interest rate (percent)"),
        _profile_option("--term", "loan_term", "Loan term in years"),
        _profile_option("--tax-rate", "property_tax_rate", "Annual property tax rate (percent)"),
        _profile_option("--insurance", "insurance_annual", "Annual homeowner's insurance"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Estimate how much home you can afford under the 28/36 guidelines."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command(name="calculate")
@input_options
@click.option("--output", "output", type=str, help="Output file path (.json)")
def calculate_command(
    gross_income: str,
    monthly_debts: str,
    down_payment_percent: str,
    interest_rate: str,
    loan_term: str,
    property_tax_rate: str,
    insurance_annual: str,
    output: Optional[str],
) -> None:
    """Compute the maximum home price and the monthly payment breakdown."""
    data = build_input_from_options(
        gross_income,
        monthly_debts,
        down_payment_percent,
        interest_rate,
        loan_term,
        property_tax_rate,
        insurance_annual,
    )
    result = run_calculation(data)
    if result is None:
        return
    if output:
        path = Path(output)
        if path.suffix.lower() != ".json":
            raise click.BadParameter("Result export must use .json extension")
        export_to_json(path, data, result)
        click.echo(f"Result exported to {path}")
    else:
        print_inputs(data)
        print_result(result)


@cli.command()
def defaults() -> None:
    """Print the default household profile."""
    print_inputs(DEFAULT_PROFILE)


# Option names accepted inside --scenario strings, mapped to keyword arguments
SCENARIO_OPTIONS: Dict[str, str] = {
    "--income": "income",
    "--debts": "debts",
    "--down-payment": "down_payment",
    "--rate": "rate",
    "--term": "term",
    "--tax-rate": "tax_rate",
    "--insurance": "insurance",
}


def parse_scenario_opts(opts: str) -> Dict[str, Any]:
    """Convert a quoted option string into ``build_input_from_options`` kwargs.

    Options that are not given fall back to the default profile.
    """
    params: Dict[str, Any] = {
        "income": str(DEFAULT_PROFILE.gross_income),
        "debts": str(DEFAULT_PROFILE.monthly_debts),
        "down_payment": str(DEFAULT_PROFILE.down_payment_percent),
        "rate": str(DEFAULT_PROFILE.interest_rate),
        "term": str(DEFAULT_PROFILE.loan_term),
        "tax_rate": str(DEFAULT_PROFILE.property_tax_rate),
        "insurance": str(DEFAULT_PROFILE.insurance_annual),
    }
    tokens = shlex.split(opts)
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if "=" in token:
            token, value = token.split("=", 1)
        else:
            i += 1
            if i >= len(tokens):
                raise click.BadParameter(f"Missing value for option in scenario: {token}")
            value = tokens[i]
        if token not in SCENARIO_OPTIONS:
            raise click.BadParameter(f"Unknown option in scenario: {token}")
        params[SCENARIO_OPTIONS[token]] = value
        i += 1
    return params


@cli.command()
@click.option("--scenario1", "scenario1", required=True, help="First scenario options quoted string")
@click.option("--scenario2", "scenario2", required=True, help="Second scenario options quoted string")
def compare(scenario1: str, scenario2: str) -> None:
    """Compare two affordability scenarios.

    Scenarios are provided as quoted option strings, for example:

        home-afford compare --scenario1 "--rate 7.5" --scenario2 "--rate 6.25 --debts 0"
    """
    input1 = build_input_from_options(**parse_scenario_opts(scenario1))
    input2 = build_input_from_options(**parse_scenario_opts(scenario2))
    result1 = run_calculation(input1)
    result2 = run_calculation(input2)
    if result1 is None or result2 is None:
        return
    print_comparison(result1, result2)


if __name__ == "__main__":
    cli()
