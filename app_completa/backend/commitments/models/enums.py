"""Enumerations for the client commitments reconciliation."""

from enum import Enum


class OutcomeKind(str, Enum):
    """
    Shape of a reconciliation outcome.

    EMPTY: Nothing to report, `reason` tells which stage emptied the set
    SINGLE: Exactly one commitment survived filtering (detail view)
    SUMMARY: Several commitments, grouped by currency
    """
    EMPTY = "empty"
    SINGLE = "single"
    SUMMARY = "summary"


class OutcomeReason(str, Enum):
    """Why an outcome is EMPTY."""
    NO_COMMITMENTS = "no_commitments"
    NO_PROJECT_MATCH = "no_project_match"
    NO_CLIENT_MATCH = "no_client_match"
    NO_CURRENCY_MATCH = "no_currency_match"
    TARGET_CURRENCY_NOT_FOUND = "target_currency_not_found"
    NO_REFERENCE_RATE = "no_reference_rate"
    FETCH_FAILED = "fetch_failed"          # Data source raised
    UNEXPECTED_ERROR = "unexpected_error"  # Anything else at the boundary


class PaymentProgress(str, Enum):
    """Progress band of a commitment's payment percentage."""
    COMPLETE = "complete"  # >= 100%
    HIGH = "high"          # >= 80%
    MEDIUM = "medium"      # >= 50%
    LOW = "low"

    @classmethod
    def from_percentage(cls, percentage: float) -> "PaymentProgress":
        if percentage >= 100:
            return cls.COMPLETE
        if percentage >= 80:
            return cls.HIGH
        if percentage >= 50:
            return cls.MEDIUM
        return cls.LOW
