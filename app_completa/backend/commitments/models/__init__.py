"""Data models for the client commitments reconciliation."""

from .enums import (
    OutcomeKind,
    OutcomeReason,
    PaymentProgress,
)
from .records import (
    Currency,
    ClientContact,
    Commitment,
    Payment,
    coerce_amount,
    coerce_rate,
)
from .results import (
    ReconciliationOptions,
    CommitmentResult,
    CurrencyGroup,
    ReconciliationOutcome,
    payment_percentage,
)

__all__ = [
    # Enums
    "OutcomeKind",
    "OutcomeReason",
    "PaymentProgress",
    # Input records
    "Currency",
    "ClientContact",
    "Commitment",
    "Payment",
    "coerce_amount",
    "coerce_rate",
    # Results
    "ReconciliationOptions",
    "CommitmentResult",
    "CurrencyGroup",
    "ReconciliationOutcome",
    "payment_percentage",
]
