"""Data sources supplying rows to the reconciliation engine."""

from typing import Optional

from ..config import Settings, get_settings
from .base import CommitmentDataSource, DataSourceError, Row
from .memory import InMemoryDataSource
from .snapshot import SnapshotDataSource
from .supabase import SupabaseDataSource


def build_data_source(settings: Optional[Settings] = None) -> CommitmentDataSource:
    """Create the data source selected by `settings.data_source`."""
    settings = settings or get_settings()
    kind = settings.data_source.lower()

    if kind == "memory":
        return InMemoryDataSource()
    if kind == "snapshot":
        return SnapshotDataSource(settings.snapshot_dir)
    if kind == "supabase":
        return SupabaseDataSource(
            url=settings.supabase_url,
            api_key=settings.supabase_key,
            schema=settings.supabase_schema,
            timeout=settings.request_timeout_seconds,
        )
    raise ValueError(f"Unknown data source: {settings.data_source}")


__all__ = [
    "CommitmentDataSource",
    "DataSourceError",
    "Row",
    "InMemoryDataSource",
    "SnapshotDataSource",
    "SupabaseDataSource",
    "build_data_source",
]
