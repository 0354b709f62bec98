"""In-memory data source."""

from copy import deepcopy
from typing import Dict, List, Optional

from .base import CommitmentDataSource, Row


class InMemoryDataSource(CommitmentDataSource):
    """
    Holds rows in memory, keyed by organization.

    Every fetch returns a copy, so callers get an independent snapshot.
    """

    def __init__(
        self,
        currencies: Optional[List[Row]] = None,
        commitments: Optional[Dict[str, List[Row]]] = None,
        payments: Optional[Dict[str, List[Row]]] = None,
    ):
        self.currencies: List[Row] = list(currencies or [])
        self.commitments: Dict[str, List[Row]] = dict(commitments or {})
        self.payments: Dict[str, List[Row]] = dict(payments or {})

    def add_organization(
        self,
        organization_id: str,
        commitments: List[Row],
        payments: List[Row],
    ) -> None:
        self.commitments[organization_id] = list(commitments)
        self.payments[organization_id] = list(payments)

    async def fetch_currencies(self) -> List[Row]:
        return deepcopy(self.currencies)

    async def fetch_commitments(self, organization_id: str) -> List[Row]:
        return deepcopy(self.commitments.get(organization_id, []))

    async def fetch_payments(self, organization_id: str) -> List[Row]:
        return deepcopy(self.payments.get(organization_id, []))
