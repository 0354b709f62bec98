"""
Reconciliation Engine - client commitments vs. payments.

Pipeline:
1. Coerce raw rows into records
2. Filter commitments (project, client)
3. Aggregate payments per commitment
4. Filter by native currency
5. Re-express in a display currency (optional)
6. Group by currency when several commitments remain

Pure and synchronous: no I/O, no state kept between runs.
"""

from typing import Any, Iterable, List, Mapping, Optional, Type, TypeVar, Union

import structlog

from ..config import get_settings
from ..models import (
    Commitment,
    Currency,
    OutcomeKind,
    OutcomeReason,
    Payment,
    ReconciliationOptions,
    ReconciliationOutcome,
)
from .aggregator import CommitmentAggregator
from .currency import CurrencyIndex
from .filters import CommitmentFilterPipeline, filter_by_currency
from .reexpression import DisplayCurrencyConverter
from .summarizer import group_by_currency

logger = structlog.get_logger()

RecordT = TypeVar("RecordT", Currency, Commitment, Payment)


def _as_records(
    items: Iterable[Union[RecordT, Mapping[str, Any]]],
    record_type: Type[RecordT],
) -> List[RecordT]:
    return [
        item if isinstance(item, record_type) else record_type.from_row(item)
        for item in items
    ]


class ReconciliationEngine:
    """
    Computes paid / remaining / percentage per commitment and per currency.

    Every "nothing to show" condition comes back as an EMPTY outcome with a
    reason; the engine does not raise for them.
    """

    def __init__(
        self,
        fallback_currency_code: Optional[str] = None,
        fallback_currency_symbol: Optional[str] = None,
    ):
        self.settings = get_settings()
        self.fallback_currency_code = (
            fallback_currency_code or self.settings.default_currency_code
        )
        self.fallback_currency_symbol = (
            fallback_currency_symbol or self.settings.default_currency_symbol
        )
        self.filters = CommitmentFilterPipeline()

    def run(
        self,
        currencies: Iterable[Union[Currency, Mapping[str, Any]]],
        commitments: Iterable[Union[Commitment, Mapping[str, Any]]],
        payments: Iterable[Union[Payment, Mapping[str, Any]]],
        options: Optional[ReconciliationOptions] = None,
    ) -> ReconciliationOutcome:
        """
        Execute one reconciliation.

        Args:
            currencies: Currency records or rows
            commitments: Commitment records or rows
            payments: Payment records or rows
            options: Filters and display currency

        Returns:
            ReconciliationOutcome (EMPTY, SINGLE or SUMMARY)
        """
        options = options or ReconciliationOptions()

        currency_index = CurrencyIndex(
            _as_records(currencies, Currency),
            fallback_code=self.fallback_currency_code,
            fallback_symbol=self.fallback_currency_symbol,
        )
        commitment_records = _as_records(commitments, Commitment)
        payment_records = _as_records(payments, Payment)

        logger.debug(
            "Starting commitments reconciliation",
            currencies=len(currency_index),
            commitments=len(commitment_records),
            payments=len(payment_records),
            **options.to_dict(),
        )

        # Filter
        filtered = self.filters.apply(commitment_records, options)
        if filtered.is_empty:
            return self._empty(filtered.reason, options)

        # Aggregate
        aggregator = CommitmentAggregator(currency_index)
        results = aggregator.compute_all(filtered.commitments, payment_records)

        # Currency filter, on native currency
        if options.currency_code:
            results = filter_by_currency(results, options.currency_code)
            if not results:
                return self._empty(OutcomeReason.NO_CURRENCY_MATCH, options)

        # Re-expression
        reference_rate = None
        if options.display_currency_code:
            converter = DisplayCurrencyConverter(currency_index)
            converted = converter.apply(
                results,
                options.display_currency_code,
                filtered.commitments,
                payment_records,
            )
            if converted.reason is not None:
                return self._empty(converted.reason, options)
            results = converted.results
            reference_rate = converted.reference_rate

        if len(results) == 1:
            outcome = ReconciliationOutcome(
                kind=OutcomeKind.SINGLE,
                options=options,
                commitments=results,
                reference_rate=reference_rate,
            )
        else:
            outcome = ReconciliationOutcome(
                kind=OutcomeKind.SUMMARY,
                options=options,
                commitments=results,
                groups=group_by_currency(results),
                reference_rate=reference_rate,
            )

        logger.info(
            "Commitments reconciled",
            kind=outcome.kind.value,
            commitments=len(outcome.commitments),
            currency_groups=len(outcome.groups),
        )
        return outcome

    def _empty(
        self,
        reason: OutcomeReason,
        options: ReconciliationOptions,
    ) -> ReconciliationOutcome:
        logger.info("Reconciliation returned no commitments", reason=reason.value)
        return ReconciliationOutcome.empty(
            reason,
            options,
            **{k: v for k, v in options.to_dict().items() if v is not None},
        )
