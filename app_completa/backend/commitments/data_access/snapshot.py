"""
Local JSON snapshot data source.
Reads exported rows from per-organization folders.
"""

import json
from pathlib import Path
from typing import List, Union

import structlog

from .base import CommitmentDataSource, DataSourceError, Row

logger = structlog.get_logger()


class SnapshotDataSource(CommitmentDataSource):
    """
    Data source backed by JSON exports.

    Expected structure:
    /snapshots/
        currencies.json            (shared by all organizations)
        org_123/
            commitments.json
            payments.json
        org_456/
            ...

    Each file holds a JSON array of row objects. A missing organization
    folder or file yields no rows.
    """

    CURRENCIES_FILE = "currencies.json"
    COMMITMENTS_FILE = "commitments.json"
    PAYMENTS_FILE = "payments.json"

    def __init__(self, base_path: Union[str, Path]):
        self.base_path = Path(base_path)

    def _org_folder(self, organization_id: str) -> Path:
        base = self.base_path.resolve()
        folder = (base / organization_id).resolve()
        if base not in folder.parents:
            raise DataSourceError(
                f"Invalid organization id: {organization_id}", status_code=400
            )
        return folder

    def _read_rows(self, path: Path) -> List[Row]:
        if not path.exists():
            logger.debug("Snapshot file not found", path=str(path))
            return []

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise DataSourceError(f"Could not read snapshot {path}: {e}")

        if not isinstance(data, list):
            raise DataSourceError(
                f"Snapshot {path} must contain a JSON array",
                details=type(data).__name__,
            )
        return data

    async def fetch_currencies(self) -> List[Row]:
        return self._read_rows(self.base_path / self.CURRENCIES_FILE)

    async def fetch_commitments(self, organization_id: str) -> List[Row]:
        return self._read_rows(
            self._org_folder(organization_id) / self.COMMITMENTS_FILE
        )

    async def fetch_payments(self, organization_id: str) -> List[Row]:
        return self._read_rows(
            self._org_folder(organization_id) / self.PAYMENTS_FILE
        )
