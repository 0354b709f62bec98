"""
Shared fixtures: currency rows and builders for commitment / payment rows.
"""

import pytest

USD = "cur-usd"
ARS = "cur-ars"
EUR = "cur-eur"


@pytest.fixture
def currencies():
    return [
        {"id": USD, "code": "USD", "name": "Dólar", "symbol": "US$"},
        {"id": ARS, "code": "ARS", "name": "Peso argentino", "symbol": "$"},
    ]


def commitment_row(
    id,
    committed_amount,
    currency_id=USD,
    exchange_rate=1,
    project_name="Torre Norte",
    project_id="proj-1",
    client_id="client-1",
    full_name=None,
    first_name="Ana",
    last_name="García",
    company_name=None,
    unit=None,
):
    """Commitment row in the flat shape a data source hands over."""
    return {
        "id": id,
        "project_id": project_id,
        "client_id": client_id,
        "unit": unit,
        "committed_amount": committed_amount,
        "currency_id": currency_id,
        "exchange_rate": exchange_rate,
        "created_at": "2024-03-01T10:00:00Z",
        "client_display_fields": {
            "id": client_id,
            "full_name": full_name,
            "first_name": first_name,
            "last_name": last_name,
            "company_name": company_name,
        },
        "project_name": project_name,
    }


def payment_row(commitment_id, amount, currency_id=USD, exchange_rate=1):
    return {
        "commitment_id": commitment_id,
        "amount": amount,
        "currency_id": currency_id,
        "exchange_rate": exchange_rate,
    }


@pytest.fixture
def make_commitment():
    return commitment_row


@pytest.fixture
def make_payment():
    return payment_row
