"""
Input records for the reconciliation engine.

Rows arrive from a data source as plain dicts. `from_row` is the only place
where their numeric fields are coerced, so every code path applies the same
rules:

- amounts: missing, empty, non-numeric, NaN or infinite -> 0.0
- rates: anything an amount would coerce to 0.0, and an actual 0 -> 1.0
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional


def coerce_amount(value: Any) -> float:
    """Coerce a stored monetary value to a finite float, defaulting to 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def coerce_rate(value: Any) -> float:
    """Coerce a stored exchange rate, defaulting to 1 (zero is never valid)."""
    rate = coerce_amount(value)
    return rate if rate != 0 else 1.0


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def _clean(value: Any) -> str:
    return str(value).strip() if value is not None else ""


@dataclass(frozen=True)
class Currency:
    """Currency reference data, immutable for a reconciliation run."""
    id: Any
    code: str
    symbol: str = ""
    name: str = ""

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Currency":
        return cls(
            id=row.get("id"),
            code=_clean(row.get("code")).upper(),
            symbol=_clean(row.get("symbol")),
            name=_clean(row.get("name")),
        )


@dataclass(frozen=True)
class ClientContact:
    """Display fields of the client behind a commitment."""
    id: Any = None
    full_name: str = ""
    first_name: str = ""
    last_name: str = ""
    company_name: str = ""

    @classmethod
    def from_row(cls, row: Optional[Dict[str, Any]]) -> "ClientContact":
        row = row or {}
        return cls(
            id=row.get("id"),
            full_name=_clean(row.get("full_name")),
            first_name=_clean(row.get("first_name")),
            last_name=_clean(row.get("last_name")),
            company_name=_clean(row.get("company_name")),
        )

    @property
    def display_name(self) -> Optional[str]:
        """Full name, else "first last", else company name."""
        if self.full_name:
            return self.full_name
        joined = " ".join(part for part in (self.first_name, self.last_name) if part)
        if joined:
            return joined
        return self.company_name or None

    @property
    def searchable_names(self) -> tuple:
        return (self.full_name, self.first_name, self.last_name, self.company_name)


@dataclass(frozen=True)
class Commitment:
    """
    A client's agreed payment obligation for a unit of a project.

    The exchange rate is the one recorded when the commitment was created;
    it belongs to this commitment only.
    """
    id: Any
    project_id: Any = None
    client_id: Any = None
    unit: Optional[str] = None
    committed_amount: float = 0.0
    currency_id: Any = None
    exchange_rate: float = 1.0
    created_at: Optional[datetime] = None
    client: ClientContact = field(default_factory=ClientContact)
    project_name: str = ""

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Commitment":
        """
        Build from either the flat shape (`client_display_fields`,
        `project_name`) or the backend's embedded shape (`contacts`,
        `projects`).
        """
        contact_row = row.get("client_display_fields") or row.get("contacts")
        project_name = row.get("project_name")
        if project_name is None:
            project_name = (row.get("projects") or {}).get("name")

        return cls(
            id=row.get("id"),
            project_id=row.get("project_id"),
            client_id=row.get("client_id"),
            unit=_clean(row.get("unit")) or None,
            committed_amount=coerce_amount(row.get("committed_amount")),
            currency_id=row.get("currency_id"),
            exchange_rate=coerce_rate(row.get("exchange_rate")),
            created_at=_parse_timestamp(row.get("created_at")),
            client=ClientContact.from_row(contact_row),
            project_name=_clean(project_name),
        )


@dataclass(frozen=True)
class Payment:
    """
    An actual payment applied against exactly one commitment.

    Amounts are always positive contributions, whatever sign the upstream
    movement carried.
    """
    commitment_id: Any
    amount: float = 0.0
    currency_id: Any = None
    exchange_rate: float = 1.0
    id: Any = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Payment":
        commitment_id = row.get("commitment_id")
        if commitment_id is None:
            commitment_id = row.get("project_client_id")

        return cls(
            id=row.get("id"),
            commitment_id=commitment_id,
            amount=abs(coerce_amount(row.get("amount"))),
            currency_id=row.get("currency_id"),
            exchange_rate=coerce_rate(row.get("exchange_rate")),
        )
