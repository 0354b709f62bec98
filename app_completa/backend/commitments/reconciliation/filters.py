"""
Commitment filter pipeline.

Filters run in a fixed order, each on the output of the previous one. The
first stage that leaves nothing stops the pipeline and names itself through
an `OutcomeReason`.
"""

from dataclasses import dataclass
from typing import List, Optional

import structlog

from ..models import (
    Commitment,
    CommitmentResult,
    OutcomeReason,
    ReconciliationOptions,
)

logger = structlog.get_logger()


@dataclass
class FilterOutcome:
    """Commitments left after filtering, or why none are left."""
    commitments: List[Commitment]
    reason: Optional[OutcomeReason] = None

    @property
    def is_empty(self) -> bool:
        return self.reason is not None


def matches_project(commitment: Commitment, project_name: str) -> bool:
    """Case-insensitive substring match on the project name."""
    return project_name.lower() in commitment.project_name.lower()


def matches_client(commitment: Commitment, client_name: str) -> bool:
    """Case-insensitive substring match on any of the client's names."""
    needle = client_name.lower()
    return any(
        needle in name.lower()
        for name in commitment.client.searchable_names
        if name
    )


class CommitmentFilterPipeline:
    """
    Narrows the working set of commitments before aggregation.

    Order:
    1. Nothing fetched at all -> NO_COMMITMENTS
    2. Project name -> NO_PROJECT_MATCH
    3. Client name -> NO_CLIENT_MATCH

    The currency filter runs later, on computed results
    (see `filter_by_currency`).
    """

    def apply(
        self,
        commitments: List[Commitment],
        options: ReconciliationOptions,
    ) -> FilterOutcome:
        if not commitments:
            return FilterOutcome([], OutcomeReason.NO_COMMITMENTS)

        selected = list(commitments)

        if options.project_name:
            selected = [
                c for c in selected if matches_project(c, options.project_name)
            ]
            logger.debug(
                "Project filter applied",
                project_name=options.project_name,
                remaining=len(selected),
            )
            if not selected:
                return FilterOutcome([], OutcomeReason.NO_PROJECT_MATCH)

        if options.client_name:
            selected = [
                c for c in selected if matches_client(c, options.client_name)
            ]
            logger.debug(
                "Client filter applied",
                client_name=options.client_name,
                remaining=len(selected),
            )
            if not selected:
                return FilterOutcome([], OutcomeReason.NO_CLIENT_MATCH)

        return FilterOutcome(selected)


def filter_by_currency(
    results: List[CommitmentResult],
    currency_code: Optional[str],
) -> List[CommitmentResult]:
    """Keep results whose native currency code equals `currency_code`."""
    if not currency_code:
        return list(results)
    wanted = currency_code.strip().upper()
    return [r for r in results if r.currency_code.upper() == wanted]
