"""Reconciliation result models."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .enums import OutcomeKind, OutcomeReason, PaymentProgress


def payment_percentage(committed: float, paid: float) -> float:
    """Paid share of a committed amount; 0 when nothing was committed."""
    if committed > 0:
        return (paid / committed) * 100
    return 0.0


@dataclass
class ReconciliationOptions:
    """Optional filters and display currency, independently combinable."""
    project_name: Optional[str] = None
    client_name: Optional[str] = None
    currency_code: Optional[str] = None
    display_currency_code: Optional[str] = None

    def __post_init__(self):
        # Blank strings behave like "not given"
        self.project_name = (self.project_name or "").strip() or None
        self.client_name = (self.client_name or "").strip() or None
        self.currency_code = (self.currency_code or "").strip().upper() or None
        self.display_currency_code = (
            (self.display_currency_code or "").strip().upper() or None
        )

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "project_name": self.project_name,
            "client_name": self.client_name,
            "currency_code": self.currency_code,
            "display_currency_code": self.display_currency_code,
        }


@dataclass
class CommitmentResult:
    """
    Paid / remaining figures for one commitment.

    Remaining balance and both percentages are derived from the committed
    and paid amounts every time they are read.
    """
    commitment_id: Any
    display_name: str
    project_name: str
    unit: Optional[str] = None

    # Amounts (in `currency_code`)
    committed_amount: float = 0.0
    total_paid: float = 0.0

    currency_code: str = ""
    currency_symbol: str = ""
    exchange_rate: float = 1.0
    payments_count: int = 0

    @property
    def remaining_balance(self) -> float:
        """Negative when the commitment is overpaid."""
        return self.committed_amount - self.total_paid

    @property
    def payment_percentage(self) -> float:
        return payment_percentage(self.committed_amount, self.total_paid)

    @property
    def remaining_percentage(self) -> float:
        return 100 - self.payment_percentage

    @property
    def progress(self) -> PaymentProgress:
        return PaymentProgress.from_percentage(self.payment_percentage)

    @property
    def is_overpaid(self) -> bool:
        return self.total_paid > self.committed_amount

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "commitment_id": self.commitment_id,
            "display_name": self.display_name,
            "project_name": self.project_name,
            "unit": self.unit,
            "committed_amount": self.committed_amount,
            "total_paid": self.total_paid,
            "remaining_balance": self.remaining_balance,
            "payment_percentage": self.payment_percentage,
            "remaining_percentage": self.remaining_percentage,
            "progress": self.progress.value,
            "currency_code": self.currency_code,
            "currency_symbol": self.currency_symbol,
            "exchange_rate": self.exchange_rate,
            "payments_count": self.payments_count,
        }


@dataclass
class CurrencyGroup:
    """Commitments sharing one currency, with their totals."""
    currency_code: str
    currency_symbol: str = ""
    commitments: List[CommitmentResult] = field(default_factory=list)

    @property
    def total_committed(self) -> float:
        return sum(c.committed_amount for c in self.commitments)

    @property
    def total_paid(self) -> float:
        return sum(c.total_paid for c in self.commitments)

    @property
    def total_remaining(self) -> float:
        return self.total_committed - self.total_paid

    @property
    def payment_percentage(self) -> float:
        return payment_percentage(self.total_committed, self.total_paid)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "currency_code": self.currency_code,
            "currency_symbol": self.currency_symbol,
            "total_committed": self.total_committed,
            "total_paid": self.total_paid,
            "total_remaining": self.total_remaining,
            "payment_percentage": self.payment_percentage,
            "commitment_ids": [c.commitment_id for c in self.commitments],
        }


@dataclass
class ReconciliationOutcome:
    """Complete result of one reconciliation run."""
    kind: OutcomeKind
    options: ReconciliationOptions = field(default_factory=ReconciliationOptions)

    # EMPTY only
    reason: Optional[OutcomeReason] = None
    context: Dict[str, Any] = field(default_factory=dict)

    # SINGLE / SUMMARY
    commitments: List[CommitmentResult] = field(default_factory=list)
    groups: List[CurrencyGroup] = field(default_factory=list)

    # Set when amounts were re-expressed in a display currency
    reference_rate: Optional[float] = None

    @classmethod
    def empty(
        cls,
        reason: OutcomeReason,
        options: Optional[ReconciliationOptions] = None,
        **context: Any,
    ) -> "ReconciliationOutcome":
        return cls(
            kind=OutcomeKind.EMPTY,
            options=options or ReconciliationOptions(),
            reason=reason,
            context=context,
        )

    @property
    def is_empty(self) -> bool:
        return self.kind == OutcomeKind.EMPTY

    @property
    def detail(self) -> Optional[CommitmentResult]:
        """The single commitment of a SINGLE outcome."""
        if self.kind == OutcomeKind.SINGLE and self.commitments:
            return self.commitments[0]
        return None

    @property
    def grand_total(self) -> Optional[CurrencyGroup]:
        """
        Combined totals, only when every commitment shares one currency.
        Amounts in different currencies are never summed.
        """
        if len(self.groups) == 1:
            return self.groups[0]
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        grand_total = self.grand_total
        return {
            "kind": self.kind.value,
            "reason": self.reason.value if self.reason else None,
            "context": self.context,
            "options": self.options.to_dict(),
            "reference_rate": self.reference_rate,
            "commitments": [c.to_dict() for c in self.commitments],
            "groups": [g.to_dict() for g in self.groups],
            "grand_total": grand_total.to_dict() if grand_total else None,
        }
