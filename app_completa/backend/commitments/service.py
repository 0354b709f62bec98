"""
Commitments service - boundary between data sources, engine and callers.

Fetches the three collections for an organization, runs the engine and
always hands back an outcome: data source faults and unexpected errors are
logged and reported as EMPTY outcomes instead of propagating.
"""

import asyncio
from typing import List, Optional, Tuple

import structlog

from .data_access import CommitmentDataSource, DataSourceError, Row
from .models import OutcomeReason, ReconciliationOptions, ReconciliationOutcome
from .presentation import format_outcome
from .reconciliation import ReconciliationEngine

logger = structlog.get_logger()


class CommitmentsService:
    """Answers "how much has each client paid" for one organization."""

    def __init__(
        self,
        source: CommitmentDataSource,
        engine: Optional[ReconciliationEngine] = None,
    ):
        self.source = source
        self.engine = engine or ReconciliationEngine()

    async def reconcile(
        self,
        organization_id: str,
        options: Optional[ReconciliationOptions] = None,
    ) -> ReconciliationOutcome:
        """
        Reconcile client commitments of an organization.

        Args:
            organization_id: Tenant whose commitments are reconciled
            options: Filters and display currency

        Returns:
            ReconciliationOutcome, never raises for data or engine faults
        """
        options = options or ReconciliationOptions()
        log = logger.bind(organization_id=organization_id)

        try:
            currencies, commitments, payments = await self._fetch_all(organization_id)
        except DataSourceError as e:
            log.error(
                "Failed to fetch commitments data",
                error=str(e),
                status_code=e.status_code,
                details=e.details,
            )
            return ReconciliationOutcome.empty(OutcomeReason.FETCH_FAILED, options)
        except Exception as e:
            log.exception("Unexpected error fetching commitments data", error=str(e))
            return ReconciliationOutcome.empty(OutcomeReason.UNEXPECTED_ERROR, options)

        try:
            return self.engine.run(currencies, commitments, payments, options)
        except Exception as e:
            log.exception("Commitments reconciliation failed", error=str(e))
            return ReconciliationOutcome.empty(OutcomeReason.UNEXPECTED_ERROR, options)

    async def _fetch_all(self, organization_id: str) -> Tuple[List[Row], List[Row], List[Row]]:
        """
        Fetch the three collections concurrently.

        Every fetch is awaited to completion before the first failure is
        raised, so none is left running against a source about to be closed.
        """
        results = await asyncio.gather(
            self.source.fetch_currencies(),
            self.source.fetch_commitments(organization_id),
            self.source.fetch_payments(organization_id),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return tuple(results)

    async def describe(
        self,
        organization_id: str,
        options: Optional[ReconciliationOptions] = None,
    ) -> str:
        """Reconcile and render the outcome as user-facing text."""
        outcome = await self.reconcile(organization_id, options)
        return format_outcome(outcome)
