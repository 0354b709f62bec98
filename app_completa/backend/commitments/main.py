"""
FastAPI application exposing client commitments reconciliation.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Optional

from fastapi import Depends, FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel
import structlog

from .config import get_settings
from .data_access import CommitmentDataSource, build_data_source
from .logging_config import setup_logging
from .models import ReconciliationOptions
from .presentation import format_outcome
from .service import CommitmentsService

logger = structlog.get_logger()
settings = get_settings()

setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info(
        "Starting Client Commitments API",
        data_source=settings.data_source,
        env=settings.app_env,
    )
    yield
    logger.info("Shutting down Client Commitments API")


app = FastAPI(
    title="Compromisos de Clientes",
    description="Conciliacion de compromisos y pagos de clientes por proyecto",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if not settings.is_production else [],
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)


async def get_data_source() -> AsyncIterator[CommitmentDataSource]:
    """Data source for one request, closed afterwards."""
    source = build_data_source(settings)
    try:
        yield source
    finally:
        await source.close()


def get_options(
    client_name: Optional[str] = Query(default=None, description="Nombre del cliente (parcial)"),
    project_name: Optional[str] = Query(default=None, description="Nombre del proyecto (parcial)"),
    currency: Optional[str] = Query(default=None, description="Código de moneda para filtrar"),
    convert_to: Optional[str] = Query(default=None, description="Código de moneda a la que convertir"),
) -> ReconciliationOptions:
    return ReconciliationOptions(
        project_name=project_name,
        client_name=client_name,
        currency_code=currency,
        display_currency_code=convert_to,
    )


# Response models
class CommitmentResponse(BaseModel):
    commitment_id: Optional[str] = None
    display_name: str
    project_name: str
    unit: Optional[str] = None
    committed_amount: float
    total_paid: float
    remaining_balance: float
    payment_percentage: float
    remaining_percentage: float
    progress: str
    currency_code: str
    currency_symbol: str
    exchange_rate: float
    payments_count: int


class CurrencyGroupResponse(BaseModel):
    currency_code: str
    currency_symbol: str
    total_committed: float
    total_paid: float
    total_remaining: float
    payment_percentage: float
    commitment_ids: list


class OutcomeResponse(BaseModel):
    kind: str
    reason: Optional[str] = None
    context: dict
    options: dict
    reference_rate: Optional[float] = None
    commitments: list[CommitmentResponse]
    groups: list[CurrencyGroupResponse]
    grand_total: Optional[CurrencyGroupResponse] = None
    message: str


# API Endpoints
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}


@app.get(
    "/api/organizations/{organization_id}/commitments",
    response_model=OutcomeResponse,
)
async def get_commitments(
    organization_id: str,
    options: ReconciliationOptions = Depends(get_options),
    source: CommitmentDataSource = Depends(get_data_source),
):
    """Commitments, payments and balances as structured data."""
    outcome = await CommitmentsService(source).reconcile(organization_id, options)

    data = outcome.to_dict()
    for commitment in data["commitments"]:
        commitment["commitment_id"] = _as_id(commitment["commitment_id"])
    for group in data["groups"]:
        group["commitment_ids"] = [_as_id(i) for i in group["commitment_ids"]]
    if data["grand_total"]:
        data["grand_total"]["commitment_ids"] = [
            _as_id(i) for i in data["grand_total"]["commitment_ids"]
        ]
    data["message"] = format_outcome(outcome)
    return data


@app.get(
    "/api/organizations/{organization_id}/commitments/text",
    response_class=PlainTextResponse,
)
async def get_commitments_text(
    organization_id: str,
    options: ReconciliationOptions = Depends(get_options),
    source: CommitmentDataSource = Depends(get_data_source),
):
    """Commitments answer as Markdown text."""
    return await CommitmentsService(source).describe(organization_id, options)


def _as_id(value) -> Optional[str]:
    return str(value) if value is not None else None


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
