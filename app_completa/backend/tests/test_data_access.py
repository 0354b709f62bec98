"""
Tests for the data sources.
"""

import json

import httpx
import pytest

from commitments.config import Settings
from commitments.data_access import (
    DataSourceError,
    InMemoryDataSource,
    SnapshotDataSource,
    SupabaseDataSource,
    build_data_source,
)


class TestSnapshotDataSource:
    """JSON exports on disk."""

    @pytest.fixture
    def snapshot_dir(self, tmp_path, currencies, make_commitment, make_payment):
        (tmp_path / "currencies.json").write_text(json.dumps(currencies), encoding="utf-8")
        org = tmp_path / "org-1"
        org.mkdir()
        (org / "commitments.json").write_text(
            json.dumps([make_commitment("c1", 1000)]), encoding="utf-8"
        )
        (org / "payments.json").write_text(
            json.dumps([make_payment("c1", 100)]), encoding="utf-8"
        )
        return tmp_path

    @pytest.mark.asyncio
    async def test_reads_rows(self, snapshot_dir):
        """Rows are read from the snapshot files."""
        source = SnapshotDataSource(snapshot_dir)

        currencies = await source.fetch_currencies()
        commitments = await source.fetch_commitments("org-1")
        payments = await source.fetch_payments("org-1")

        assert [c["code"] for c in currencies] == ["USD", "ARS"]
        assert commitments[0]["id"] == "c1"
        assert payments[0]["commitment_id"] == "c1"

    @pytest.mark.asyncio
    async def test_missing_organization_has_no_rows(self, snapshot_dir):
        """An organization without files has no rows."""
        source = SnapshotDataSource(snapshot_dir)
        assert await source.fetch_commitments("org-2") == []
        assert await source.fetch_payments("org-2") == []

    @pytest.mark.asyncio
    async def test_invalid_json_raises(self, snapshot_dir):
        """Broken JSON raises DataSourceError."""
        (snapshot_dir / "org-1" / "payments.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(DataSourceError):
            await SnapshotDataSource(snapshot_dir).fetch_payments("org-1")

    @pytest.mark.asyncio
    async def test_non_array_raises(self, snapshot_dir):
        """A JSON object instead of a list raises DataSourceError."""
        (snapshot_dir / "currencies.json").write_text('{"id": 1}', encoding="utf-8")
        with pytest.raises(DataSourceError):
            await SnapshotDataSource(snapshot_dir).fetch_currencies()

    @pytest.mark.asyncio
    async def test_organization_id_cannot_escape_base_path(self, snapshot_dir):
        """Organization ids cannot point outside the snapshot folder."""
        with pytest.raises(DataSourceError) as exc_info:
            await SnapshotDataSource(snapshot_dir / "org-1").fetch_commitments("../org-1")
        assert exc_info.value.status_code == 400


class TestSupabaseDataSource:
    """PostgREST client, against a mocked transport."""

    @staticmethod
    def _source(handler):
        return SupabaseDataSource(
            url="https://demo.supabase.co/",
            api_key="anon-key",
            transport=httpx.MockTransport(handler),
        )

    @pytest.mark.asyncio
    async def test_fetches_tables_with_organization_filter(self):
        """Each table is queried with auth headers and the organization filter."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[{"id": "row-1"}])

        source = self._source(handler)
        try:
            assert await source.fetch_currencies() == [{"id": "row-1"}]
            await source.fetch_commitments("org-1")
            await source.fetch_payments("org-1")
        finally:
            await source.close()

        paths = [r.url.path for r in seen]
        assert paths == [
            "/rest/v1/currencies",
            "/rest/v1/project_clients",
            "/rest/v1/movement_payments_view",
        ]
        assert seen[1].url.params["organization_id"] == "eq.org-1"
        assert "contacts!inner" in seen[1].url.params["select"]
        assert seen[0].headers["apikey"] == "anon-key"
        assert seen[0].headers["authorization"] == "Bearer anon-key"

    @pytest.mark.asyncio
    async def test_authentication_failure(self):
        """Rejected credentials raise with the status code."""
        source = self._source(lambda request: httpx.Response(401, json={"message": "JWT"}))
        with pytest.raises(DataSourceError) as exc_info:
            await source.fetch_currencies()
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_api_error_keeps_details(self):
        """API errors keep the response body as details."""
        source = self._source(
            lambda request: httpx.Response(500, json={"message": "relation missing"})
        )
        with pytest.raises(DataSourceError) as exc_info:
            await source.fetch_payments("org-1")
        assert exc_info.value.status_code == 500
        assert exc_info.value.details == {"message": "relation missing"}

    @pytest.mark.asyncio
    async def test_unexpected_payload(self):
        """A non-list payload raises DataSourceError."""
        source = self._source(lambda request: httpx.Response(200, json={"rows": []}))
        with pytest.raises(DataSourceError):
            await source.fetch_currencies()

    @pytest.mark.asyncio
    async def test_missing_url(self):
        """No URL configured raises DataSourceError."""
        source = SupabaseDataSource(url="", api_key="key")
        with pytest.raises(DataSourceError):
            await source.fetch_currencies()


class TestBuildDataSource:

    def test_memory(self):
        """memory setting builds the in-memory source."""
        assert isinstance(build_data_source(Settings(data_source="memory")), InMemoryDataSource)

    def test_snapshot(self, tmp_path):
        """snapshot setting builds the snapshot source."""
        source = build_data_source(Settings(data_source="Snapshot", snapshot_dir=tmp_path))
        assert isinstance(source, SnapshotDataSource)
        assert source.base_path == tmp_path

    def test_supabase(self):
        """supabase setting builds the PostgREST source."""
        source = build_data_source(Settings(
            data_source="supabase",
            supabase_url="https://demo.supabase.co",
            supabase_key="key",
        ))
        assert isinstance(source, SupabaseDataSource)
        assert source.base_url == "https://demo.supabase.co"

    def test_unknown(self):
        """Unknown data source names are rejected."""
        with pytest.raises(ValueError):
            build_data_source(Settings(data_source="excel"))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
