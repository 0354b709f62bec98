"""
Supabase (PostgREST) data source for currencies, commitments and payments.
"""

from typing import Any, Dict, List, Optional

import httpx
import structlog
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..config import get_settings
from .base import CommitmentDataSource, DataSourceError, Row

logger = structlog.get_logger()

COMMITMENT_COLUMNS = (
    "id,project_id,client_id,unit,committed_amount,currency_id,"
    "exchange_rate,created_at,"
    "contacts!inner(id,first_name,last_name,company_name,full_name),"
    "projects!inner(id,name)"
)


class SupabaseDataSource(CommitmentDataSource):
    """
    Reads rows through the Supabase REST endpoint (`/rest/v1`).

    Tables:
    - currencies
    - project_clients (commitments, with embedded contacts and projects)
    - movement_payments_view (payments, `project_client_id` is the
      commitment reference)
    """

    def __init__(
        self,
        url: Optional[str] = None,
        api_key: Optional[str] = None,
        schema: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = get_settings()
        self.base_url = (url or self.settings.supabase_url).rstrip("/")
        self.api_key = api_key or self.settings.supabase_key
        self.schema = schema or self.settings.supabase_schema
        self.timeout = timeout or self.settings.request_timeout_seconds
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def headers(self) -> Dict[str, str]:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }
        if self.schema:
            headers["Accept-Profile"] = self.schema
        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            if not self.base_url:
                raise DataSourceError("Supabase URL is not configured")
            self._client = httpx.AsyncClient(
                base_url=f"{self.base_url}/rest/v1",
                headers=self.headers,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception_type(httpx.TransportError),
        reraise=True,
    )
    async def _send(self, table: str, params: Dict[str, Any]) -> httpx.Response:
        client = await self._get_client()
        return await client.get(f"/{table}", params=params)

    async def _select(self, table: str, params: Dict[str, Any]) -> List[Row]:
        """Run a PostgREST select and return the rows."""
        try:
            response = await self._send(table, params)
        except httpx.TimeoutException:
            raise DataSourceError(f"Request timeout reading {table}")
        except httpx.RequestError as e:
            raise DataSourceError(f"Request error reading {table}: {str(e)}")

        if response.status_code in (401, 403):
            raise DataSourceError(
                "Authentication failed. Check the Supabase key.",
                status_code=response.status_code,
            )

        if response.status_code >= 400:
            error_detail: Any = response.text
            try:
                error_detail = response.json()
            except ValueError:
                pass
            raise DataSourceError(
                f"API error reading {table}: {response.status_code}",
                status_code=response.status_code,
                details=error_detail,
            )

        rows = response.json()
        if not isinstance(rows, list):
            raise DataSourceError(
                f"Unexpected payload reading {table}", details=rows
            )

        logger.debug("Rows fetched", table=table, rows=len(rows))
        return rows

    async def fetch_currencies(self) -> List[Row]:
        return await self._select("currencies", {"select": "id,code,name,symbol"})

    async def fetch_commitments(self, organization_id: str) -> List[Row]:
        return await self._select(
            "project_clients",
            {
                "select": COMMITMENT_COLUMNS,
                "organization_id": f"eq.{organization_id}",
            },
        )

    async def fetch_payments(self, organization_id: str) -> List[Row]:
        return await self._select(
            "movement_payments_view",
            {
                "select": "*",
                "organization_id": f"eq.{organization_id}",
            },
        )
