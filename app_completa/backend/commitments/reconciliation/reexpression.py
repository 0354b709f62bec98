"""
Display-currency re-expression of computed commitment results.
"""

from dataclasses import dataclass, field, replace
from typing import List, Optional

import structlog

from ..models import (
    Commitment,
    CommitmentResult,
    Currency,
    OutcomeReason,
    Payment,
)
from .currency import CurrencyIndex, convert

logger = structlog.get_logger()


@dataclass
class ReexpressionOutcome:
    """Converted results, or why conversion could not happen."""
    results: List[CommitmentResult] = field(default_factory=list)
    target: Optional[Currency] = None
    reference_rate: Optional[float] = None
    reason: Optional[OutcomeReason] = None


class DisplayCurrencyConverter:
    """
    Re-expresses results in one caller-selected currency.

    The target rate is never invented: it must come from a commitment in
    scope or from a payment already denominated in the target currency.
    """

    def __init__(self, currencies: CurrencyIndex):
        self.currencies = currencies

    def reference_rate(
        self,
        target: Currency,
        commitments: List[Commitment],
        payments: List[Payment],
    ) -> Optional[float]:
        """
        Rate of the first commitment, else first payment, in `target`.

        Records whose currency id is not in the index never match, even
        though their code falls back to the default one elsewhere.
        """
        for commitment in commitments:
            if self._is_in(commitment.currency_id, target):
                return commitment.exchange_rate

        for payment in payments:
            if self._is_in(payment.currency_id, target):
                return payment.exchange_rate

        return None

    def _is_in(self, currency_id, target: Currency) -> bool:
        currency = self.currencies.get(currency_id)
        return currency is not None and currency.code == target.code

    def convert_results(
        self,
        results: List[CommitmentResult],
        target: Currency,
        target_rate: float,
    ) -> List[CommitmentResult]:
        # Remaining and percentages are properties, so they are rederived
        # from the converted amounts.
        return [
            replace(
                result,
                committed_amount=convert(
                    result.committed_amount, result.exchange_rate, target_rate
                ),
                total_paid=convert(
                    result.total_paid, result.exchange_rate, target_rate
                ),
                currency_code=target.code,
                currency_symbol=target.symbol or self.currencies.fallback_symbol,
            )
            for result in results
        ]

    def apply(
        self,
        results: List[CommitmentResult],
        target_code: str,
        commitments: List[Commitment],
        payments: List[Payment],
    ) -> ReexpressionOutcome:
        """
        Args:
            results: Per-commitment results to convert
            target_code: Display currency code
            commitments: In-scope commitments, searched first for a rate
            payments: All payments, searched second
        """
        target = self.currencies.find_by_code(target_code)
        if target is None:
            logger.info("Display currency not found", currency=target_code)
            return ReexpressionOutcome(
                reason=OutcomeReason.TARGET_CURRENCY_NOT_FOUND
            )

        rate = self.reference_rate(target, commitments, payments)
        if rate is None:
            logger.info("No reference rate for display currency", currency=target.code)
            return ReexpressionOutcome(
                target=target, reason=OutcomeReason.NO_REFERENCE_RATE
            )

        logger.debug(
            "Re-expressing results",
            currency=target.code,
            reference_rate=rate,
            results=len(results),
        )
        return ReexpressionOutcome(
            results=self.convert_results(results, target, rate),
            target=target,
            reference_rate=rate,
        )
