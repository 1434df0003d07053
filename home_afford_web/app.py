import logging
import os

from flask import Flask, jsonify, redirect, render_template, request, url_for

from home_afford.data_models import DEFAULT_PROFILE
from home_afford.engine import AffordabilityError, DegenerateInput, calculate
from home_afford.formatter import RESULT_LABELS, present_result
from home_afford.utils import FORM_FIELDS, collect_input, field_errors

logger = logging.getLogger(__name__)

FIELD_LABELS = {
    "gross-income": "Gross annual income ($)",
    "monthly-debts": "Monthly debt payments ($)",
    "down-payment-percent": "Down payment (%)",
    "interest-rate": "Interest rate (%)",
    "loan-term": "Loan term (years)",
    "property-tax-rate": "Property tax rate (%)",
    "insurance-annual": "Home insurance per year ($)",
}


def _default_form_values() -> dict:
    return {form_name: f"{getattr(DEFAULT_PROFILE, attr):g}" for form_name, attr in FORM_FIELDS.items()}


def _form_values(form) -> dict:
    return {form_name: form.get(form_name, "").strip() for form_name in FORM_FIELDS}


def _run_analysis(values: dict):
    """Return (display, error) for the submitted form values.

    Both are None when the inputs are degenerate; results are simply withheld.
    """
    data = collect_input(values)
    try:
        result = calculate(data)
    except DegenerateInput:
        logger.debug("Withholding results for degenerate input")
        return None, None
    except AffordabilityError as exc:
        return None, exc.message
    return present_result(result), None


def create_app(config=None) -> Flask:
    app = Flask(__name__)
    app.config["ASSET_VERSION"] = os.environ.get("ASSET_VERSION", "1")
    app.config["LOG_LEVEL"] = os.environ.get("LOG_LEVEL", "INFO").upper()
    if config:
        app.config.update(config)
    logging.basicConfig(level=app.config["LOG_LEVEL"])

    def render_form(values: dict, errors=None, display=None, error=None, status: int = 200):
        return (
            render_template(
                "index.html",
                fields=FIELD_LABELS,
                values=values,
                errors=errors or {},
                display=display,
                result_labels=RESULT_LABELS,
                error=error,
                asset_version=app.config["ASSET_VERSION"],
            ),
            status,
        )

    @app.route("/", methods=["GET", "POST"])
    def index():
        if request.method == "GET":
            return render_form(_default_form_values())

        values = _form_values(request.form)
        errors = field_errors(values)
        if errors:
            return render_form(values, errors=errors, status=400)
        display, error = _run_analysis(values)
        return render_form(values, display=display, error=error)

    @app.post("/reset")
    def reset():
        return redirect(url_for("index"))

    @app.post("/api/affordability")
    def api_affordability():
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return jsonify({"error": "invalid_request", "message": "Expected a JSON object."}), 400
        errors = field_errors(payload)
        if errors:
            return jsonify({"error": "invalid_input", "message": "Invalid fields.", "fields": errors}), 422
        data = collect_input(payload)
        try:
            result = calculate(data)
        except AffordabilityError as exc:
            return jsonify({"error": exc.kind, "message": exc.message}), 422
        return jsonify(
            {
                "input": data.to_dict(),
                "result": result.to_dict(),
                "display": present_result(result),
            }
        )

    return app


if __name__ == "__main__":
    print("Starting Home Affordability web app...")
    create_app().run(host="0.0.0.0", port=8710, debug=True)
