"""
Data source contract for the reconciliation service.

A data source hands back the three flat collections the engine consumes
(currencies, commitments, payments) as lists of plain dicts. The engine
never talks to a backend itself.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

Row = Dict[str, Any]


class DataSourceError(Exception):
    """Raised when a data source cannot produce its rows."""
    def __init__(self, message: str, status_code: int = 0, details: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class CommitmentDataSource(ABC):
    """Supplies currency, commitment and payment rows for an organization."""

    @abstractmethod
    async def fetch_currencies(self) -> List[Row]:
        """Currency rows: id, code, name, symbol."""

    @abstractmethod
    async def fetch_commitments(self, organization_id: str) -> List[Row]:
        """Commitment rows of one organization, with client and project fields."""

    @abstractmethod
    async def fetch_payments(self, organization_id: str) -> List[Row]:
        """Payment rows of one organization, each referencing a commitment."""

    async def close(self) -> None:
        """Release any held resources."""
