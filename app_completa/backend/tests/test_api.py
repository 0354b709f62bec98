"""
Tests for the HTTP endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from commitments.data_access import InMemoryDataSource
from commitments.main import app, get_data_source


@pytest.fixture
def client(currencies, make_commitment, make_payment):
    source = InMemoryDataSource(currencies=currencies)
    source.add_organization(
        "org-1",
        commitments=[
            make_commitment("c1", 1000),
            make_commitment("c2", 50000, currency_id="cur-ars", first_name="Luis"),
        ],
        payments=[
            make_payment("c1", 400),
            make_payment("c2", 10000, currency_id="cur-ars"),
        ],
    )
    app.dependency_overrides[get_data_source] = lambda: source
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class TestCommitmentsAPI:

    def test_health(self, client):
        """Health check answers."""
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["timestamp"].endswith("+00:00")

    def test_summary(self, client):
        """Several currencies come back grouped with a message."""
        response = client.get("/api/organizations/org-1/commitments")
        assert response.status_code == 200

        data = response.json()
        assert data["kind"] == "summary"
        assert [g["currency_code"] for g in data["groups"]] == ["USD", "ARS"]
        assert data["grand_total"] is None
        assert data["message"].startswith("**Compromisos de pago de clientes**")

    def test_single_with_filters(self, client):
        """A currency filter narrows the answer to one commitment."""
        response = client.get(
            "/api/organizations/org-1/commitments",
            params={"currency": "usd"},
        )
        data = response.json()

        assert data["kind"] == "single"
        [commitment] = data["commitments"]
        assert commitment["commitment_id"] == "c1"
        assert commitment["remaining_balance"] == 600
        assert commitment["payment_percentage"] == pytest.approx(40)
        assert commitment["progress"] == "low"

    def test_empty_outcome_carries_reason(self, client):
        """Empty answers carry their reason and context."""
        response = client.get(
            "/api/organizations/org-1/commitments",
            params={"convert_to": "EUR"},
        )
        data = response.json()

        assert response.status_code == 200
        assert data["kind"] == "empty"
        assert data["reason"] == "target_currency_not_found"
        assert data["context"] == {"display_currency_code": "EUR"}

    def test_text_endpoint(self, client):
        """Text endpoint returns the formatted answer."""
        response = client.get(
            "/api/organizations/org-1/commitments/text",
            params={"client_name": "luis"},
        )
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text.startswith('**Luis García** en el proyecto **"Torre Norte"**')


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
