"""Tests for the Flask front end and JSON endpoint."""

DEFAULT_FORM = {
    "gross-income": "75,000",
    "monthly-debts": "500",
    "down-payment-percent": "20",
    "interest-rate": "7.5",
    "loan-term": "30",
    "property-tax-rate": "1.2",
    "insurance-annual": "1,200",
}


def test_form_is_prefilled_with_defaults(client):
    response = client.get("/")
    assert response.status_code == 200
    page = response.get_data(as_text=True)
    assert 'value="75000"' in page
    assert 'value="7.5"' in page
    assert 'id="results"' not in page


def test_form_submission_shows_results(client):
    response = client.post("/", data=DEFAULT_FORM)
    assert response.status_code == 200
    page = response.get_data(as_text=True)
    assert 'id="results"' in page
    assert "Maximum home price" in page
    assert "32.7%" in page
    assert "40.7%" in page
    # submitted values are echoed back
    assert 'value="75,000"' in page


def test_form_submission_with_high_debts_shows_advisory(client):
    form = dict(DEFAULT_FORM, **{"gross-income": "60000", "monthly-debts": "2000"})
    page = client.post("/", data=form).get_data(as_text=True)
    assert "too high for a mortgage" in page
    assert 'id="results"' not in page


def test_form_submission_with_invalid_field(client):
    form = dict(DEFAULT_FORM, **{"monthly-debts": "-5"})
    response = client.post("/", data=form)
    assert response.status_code == 400
    assert "Please enter a valid positive number" in response.get_data(as_text=True)


def test_form_submission_with_zero_rate_withholds_results(client):
    form = dict(DEFAULT_FORM, **{"interest-rate": "0"})
    response = client.post("/", data=form)
    assert response.status_code == 200
    page = response.get_data(as_text=True)
    assert 'id="results"' not in page
    assert "error-message" not in page


def test_reset_redirects_to_fresh_form(client):
    response = client.post("/reset")
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/")


def test_api_calculates(client):
    payload = {
        "gross_income": 75000,
        "monthly_debts": 500,
        "down_payment_percent": 20,
        "interest_rate": 7.5,
        "loan_term": 30,
        "property_tax_rate": 1.2,
        "insurance_annual": 1200,
    }
    response = client.post("/api/affordability", json=payload)
    assert response.status_code == 200
    data = response.get_json()
    assert data["input"] == {k: float(v) for k, v in payload.items()}
    assert data["result"]["max_home_price"] > data["result"]["max_loan_amount"]
    assert data["display"]["dti_ratio"] == "40.7%"


def test_api_rejects_full_down_payment(client):
    response = client.post("/api/affordability", json=dict(DEFAULT_FORM, **{"down-payment-percent": "100"}))
    assert response.status_code == 422
    assert response.get_json()["error"] == "invalid_down_payment"


def test_api_reports_degenerate_input(client):
    response = client.post("/api/affordability", json=dict(DEFAULT_FORM, **{"loan-term": "0"}))
    assert response.status_code == 422
    assert response.get_json()["error"] == "degenerate_input"


def test_api_reports_invalid_fields(client):
    response = client.post("/api/affordability", json={"gross_income": "lots"})
    assert response.status_code == 422
    body = response.get_json()
    assert body["error"] == "invalid_input"
    assert "gross-income" in body["fields"]


def test_api_requires_json_object(client):
    response = client.post("/api/affordability", data="not json", content_type="text/plain")
    assert response.status_code == 400


def test_api_handles_very_long_term(client):
    response = client.post("/api/affordability", json=dict(DEFAULT_FORM, **{"loan-term": "10000"}))
    assert response.status_code == 200
    result = response.get_json()["result"]
    assert result["max_loan_amount"] > 0
    assert result["principal_interest"] > 0


def test_api_handles_tiny_rate(client):
    response = client.post("/api/affordability", json=dict(DEFAULT_FORM, **{"interest-rate": "1e-15"}))
    assert response.status_code == 200
    assert response.get_json()["result"]["max_home_price"] > 0
