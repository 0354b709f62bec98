"""
Tests for the text rendering of outcomes.
"""

import pytest

from commitments.models import (
    CommitmentResult,
    OutcomeKind,
    OutcomeReason,
    ReconciliationOptions,
    ReconciliationOutcome,
)
from commitments.presentation import (
    format_currency,
    format_number,
    format_outcome,
)
from commitments.reconciliation import ReconciliationEngine, UNKNOWN_CLIENT


class TestNumberFormatting:

    @pytest.mark.parametrize(
        "value, expected",
        [
            (0, "0,00"),
            (1234.5, "1.234,50"),
            (1234567.891, "1.234.567,89"),
            (-1234.5, "-1.234,50"),
            (-0.001, "0,00"),
        ],
    )
    def test_format_number(self, value, expected):
        """Numbers use dot thousands and comma decimals."""
        assert format_number(value) == expected

    def test_format_currency(self):
        """Amounts carry symbol and code."""
        assert format_currency(1500, "US$", "USD") == "US$ 1.500,00 USD"


class TestEmptyMessages:
    """Every reason renders its own message."""

    def test_messages_are_distinct(self):
        """Every empty reason has its own message."""
        options = ReconciliationOptions(
            project_name="Torre",
            client_name="Ana",
            currency_code="EUR",
            display_currency_code="USD",
        )
        messages = {
            reason: format_outcome(ReconciliationOutcome.empty(reason, options))
            for reason in OutcomeReason
        }
        assert len(set(messages.values())) == len(OutcomeReason)

    def test_client_message_mentions_project(self):
        """Client message names the project when given."""
        outcome = ReconciliationOutcome.empty(
            OutcomeReason.NO_CLIENT_MATCH,
            ReconciliationOptions(project_name="Torre", client_name="Ana"),
        )
        assert format_outcome(outcome) == (
            'No encontré compromisos de **"Ana"** en el proyecto **"Torre"**'
        )

    def test_no_commitments_without_project(self):
        """Organization-wide message when nothing exists."""
        outcome = ReconciliationOutcome.empty(OutcomeReason.NO_COMMITMENTS)
        assert format_outcome(outcome) == (
            "No encontré compromisos de clientes en tu organización"
        )

    def test_no_reference_rate(self):
        """Missing reference rate names the display currency."""
        outcome = ReconciliationOutcome.empty(
            OutcomeReason.NO_REFERENCE_RATE,
            ReconciliationOptions(display_currency_code="usd"),
        )
        assert "**USD**" in format_outcome(outcome)
        assert "referencia de conversión" in format_outcome(outcome)


class TestDetailAndSummary:

    @pytest.fixture
    def engine(self):
        return ReconciliationEngine()

    def test_detail(self, engine, currencies, make_commitment, make_payment):
        """Single commitment detail lists amounts and progress."""
        outcome = engine.run(
            currencies,
            [make_commitment("c1", 1000, unit="Depto 4B")],
            [make_payment("c1", 850)],
        )
        text = format_outcome(outcome)

        assert text.startswith('**Ana García** en el proyecto **"Torre Norte"** (Depto 4B):')
        assert "Monto comprometido: **US$ 1.000,00 USD**" in text
        assert "Pagado a la fecha: **US$ 850,00 USD** (1 pago)" in text
        assert "Saldo pendiente: **US$ 150,00 USD**" in text
        assert "🟢 **Avance de pago**: **85.0%** completado" in text
        assert "Falta pagar: **15.0%**" in text

    def test_detail_pluralizes_payments_and_marks_overpayment(
        self, engine, currencies, make_commitment, make_payment
    ):
        """Payment count is pluralized and overpayment is complete."""
        outcome = engine.run(
            currencies,
            [make_commitment("c1", 100)],
            [make_payment("c1", 80), make_payment("c1", 40)],
        )
        text = format_outcome(outcome)

        assert "(2 pagos)" in text
        assert "Saldo pendiente: **US$ -20,00 USD**" in text
        assert "✅" in text

    def test_unknown_client_label(self):
        """Unknown client sentinel is shown in Spanish."""
        result = CommitmentResult(
            commitment_id="c1",
            display_name=UNKNOWN_CLIENT,
            project_name="Torre",
            committed_amount=10,
            currency_code="USD",
            currency_symbol="$",
        )
        outcome = ReconciliationOutcome(kind=OutcomeKind.SINGLE, commitments=[result])

        assert format_outcome(outcome).startswith("**Cliente desconocido**")

    def test_summary(self, engine, currencies, make_commitment, make_payment):
        """Summary has one block per currency."""
        outcome = engine.run(
            currencies,
            [
                make_commitment("u1", 100),
                make_commitment("a1", 50000, currency_id="cur-ars", first_name="Luis",
                                last_name="Pérez"),
            ],
            [make_payment("u1", 100), make_payment("a1", 20000, currency_id="cur-ars")],
            ReconciliationOptions(project_name="Torre"),
        )
        text = format_outcome(outcome)

        assert text.startswith('**Compromisos de pago de clientes** en **"Torre"**:')
        assert (
            "💰 **USD**: US$ 100,00 USD comprometidos, US$ 100,00 USD pagados (100.0%)"
            in text
        )
        assert "💰 **ARS**: $ 50.000,00 ARS comprometidos" in text
        assert "🔴 **Luis Pérez**: $ 50.000,00 ARS ($ 20.000,00 ARS pagado, 40.0%)" in text
        assert text.index("**USD**") < text.index("**ARS**")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
