"""
Per-commitment aggregation: paid, remaining and percentages.
"""

from collections import defaultdict
from typing import Dict, Iterable, List

import structlog

from ..models import Commitment, CommitmentResult, Payment
from .currency import CurrencyIndex, convert

logger = structlog.get_logger()

UNKNOWN_CLIENT = "unknown client"
UNKNOWN_PROJECT = "unknown project"


def index_payments(payments: Iterable[Payment]) -> Dict[object, List[Payment]]:
    """Group payments by the commitment they reference, keeping order."""
    by_commitment: Dict[object, List[Payment]] = defaultdict(list)
    for payment in payments:
        by_commitment[payment.commitment_id].append(payment)
    return by_commitment


class CommitmentAggregator:
    """
    Computes how much of one commitment has been paid.

    Only payments whose `commitment_id` equals the commitment's id count,
    so a client's payments never leak across their other commitments.
    """

    def __init__(self, currencies: CurrencyIndex):
        self.currencies = currencies

    def paid_amount(self, commitment: Commitment, payments: List[Payment]) -> float:
        """Sum payments in the commitment's currency."""
        commitment_code = self.currencies.code_for(commitment.currency_id)
        total = 0.0

        for payment in payments:
            amount = abs(payment.amount)
            if self.currencies.code_for(payment.currency_id) == commitment_code:
                total += amount
            else:
                total += convert(
                    amount, payment.exchange_rate, commitment.exchange_rate
                )

        return total

    def compute(
        self,
        commitment: Commitment,
        payments_by_commitment: Dict[object, List[Payment]],
    ) -> CommitmentResult:
        payments = payments_by_commitment.get(commitment.id, [])
        paid = self.paid_amount(commitment, payments)

        result = CommitmentResult(
            commitment_id=commitment.id,
            display_name=commitment.client.display_name or UNKNOWN_CLIENT,
            project_name=commitment.project_name or UNKNOWN_PROJECT,
            unit=commitment.unit,
            committed_amount=commitment.committed_amount,
            total_paid=paid,
            currency_code=self.currencies.code_for(commitment.currency_id),
            currency_symbol=self.currencies.symbol_for(commitment.currency_id),
            exchange_rate=commitment.exchange_rate,
            payments_count=len(payments),
        )

        logger.debug(
            "Commitment aggregated",
            commitment_id=commitment.id,
            payments=len(payments),
            committed=result.committed_amount,
            paid=result.total_paid,
            currency=result.currency_code,
        )
        return result

    def compute_all(
        self,
        commitments: List[Commitment],
        payments: Iterable[Payment],
    ) -> List[CommitmentResult]:
        payments_by_commitment = index_payments(payments)
        return [self.compute(c, payments_by_commitment) for c in commitments]
