"""
Text rendering of reconciliation outcomes.

Produces the Spanish Markdown answers shown to users (and to the assistant
that relays them). All wording, number formatting and progress markers live
here; the engine only returns structured data.
"""

from typing import Callable, Dict, List

from ..models import (
    CommitmentResult,
    CurrencyGroup,
    OutcomeKind,
    OutcomeReason,
    PaymentProgress,
    ReconciliationOptions,
    ReconciliationOutcome,
)
from ..reconciliation import UNKNOWN_CLIENT, UNKNOWN_PROJECT

PROGRESS_MARKERS: Dict[PaymentProgress, str] = {
    PaymentProgress.COMPLETE: "✅",
    PaymentProgress.HIGH: "🟢",
    PaymentProgress.MEDIUM: "🟡",
    PaymentProgress.LOW: "🔴",
}

SENTINEL_LABELS = {
    UNKNOWN_CLIENT: "Cliente desconocido",
    UNKNOWN_PROJECT: "Proyecto desconocido",
}


def format_number(value: float, decimals: int = 2) -> str:
    """es-AR grouping: dot for thousands, comma for decimals."""
    text = f"{abs(value):,.{decimals}f}"
    text = text.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"-{text}" if round(value, decimals) < 0 else text


def format_currency(amount: float, symbol: str, code: str) -> str:
    """E.g. `format_currency(1234.5, "$", "ARS")` -> "$ 1.234,50 ARS"."""
    return f"{symbol} {format_number(amount)} {code}".strip()


def format_percentage(value: float) -> str:
    return f"{value:.1f}%"


def _label(value: str) -> str:
    return SENTINEL_LABELS.get(value, value)


def _unit_suffix(result: CommitmentResult) -> str:
    return f" ({result.unit})" if result.unit else ""


def _in_project(options: ReconciliationOptions) -> str:
    return f' en el proyecto **"{options.project_name}"**' if options.project_name else ""


# Empty outcomes


def _no_commitments(outcome: ReconciliationOutcome) -> str:
    return "No encontré compromisos de clientes en tu organización"


def _no_project_match(outcome: ReconciliationOutcome) -> str:
    return f"No encontré compromisos de clientes{_in_project(outcome.options)}"


def _no_client_match(outcome: ReconciliationOutcome) -> str:
    options = outcome.options
    return f'No encontré compromisos de **"{options.client_name}"**{_in_project(options)}'


def _no_currency_match(outcome: ReconciliationOutcome) -> str:
    return f"No encontré compromisos de clientes en **{outcome.options.currency_code}**"


def _target_not_found(outcome: ReconciliationOutcome) -> str:
    return (
        f"No encontré la moneda **{outcome.options.display_currency_code}** "
        "para convertir"
    )


def _no_reference_rate(outcome: ReconciliationOutcome) -> str:
    return (
        f"No encontré datos en **{outcome.options.display_currency_code}** "
        "para usar como referencia de conversión"
    )


def _fetch_failed(outcome: ReconciliationOutcome) -> str:
    return (
        "No pude obtener los compromisos de clientes en este momento. "
        "Por favor intenta nuevamente."
    )


def _unexpected(outcome: ReconciliationOutcome) -> str:
    return (
        "Error inesperado al buscar compromisos de clientes. "
        "Por favor intenta nuevamente."
    )


EMPTY_MESSAGES: Dict[OutcomeReason, Callable[[ReconciliationOutcome], str]] = {
    OutcomeReason.NO_COMMITMENTS: _no_commitments,
    OutcomeReason.NO_PROJECT_MATCH: _no_project_match,
    OutcomeReason.NO_CLIENT_MATCH: _no_client_match,
    OutcomeReason.NO_CURRENCY_MATCH: _no_currency_match,
    OutcomeReason.TARGET_CURRENCY_NOT_FOUND: _target_not_found,
    OutcomeReason.NO_REFERENCE_RATE: _no_reference_rate,
    OutcomeReason.FETCH_FAILED: _fetch_failed,
    OutcomeReason.UNEXPECTED_ERROR: _unexpected,
}


# Detail and summary


def format_detail(result: CommitmentResult) -> str:
    """Detailed answer for a single commitment."""
    symbol, code = result.currency_symbol, result.currency_code
    payments = f"{result.payments_count} pago{'s' if result.payments_count != 1 else ''}"
    marker = PROGRESS_MARKERS[result.progress]

    return (
        f"**{_label(result.display_name)}** en el proyecto "
        f'**"{_label(result.project_name)}"**{_unit_suffix(result)}:\n\n'
        f"📊 **Resumen del compromiso**:\n"
        f"• Monto comprometido: **{format_currency(result.committed_amount, symbol, code)}**\n"
        f"• Pagado a la fecha: **{format_currency(result.total_paid, symbol, code)}** ({payments})\n"
        f"• Saldo pendiente: **{format_currency(result.remaining_balance, symbol, code)}**\n\n"
        f"{marker} **Avance de pago**: **{format_percentage(result.payment_percentage)}** completado\n"
        f"• Falta pagar: **{format_percentage(result.remaining_percentage)}**"
    )


def format_group(group: CurrencyGroup) -> str:
    symbol, code = group.currency_symbol, group.currency_code
    lines: List[str] = [
        f"💰 **{code}**: {format_currency(group.total_committed, symbol, code)} comprometidos, "
        f"{format_currency(group.total_paid, symbol, code)} pagados "
        f"({format_percentage(group.payment_percentage)})",
        "",
    ]
    for result in group.commitments:
        lines.append(
            f"{PROGRESS_MARKERS[result.progress]} **{_label(result.display_name)}**"
            f"{_unit_suffix(result)}: {format_currency(result.committed_amount, symbol, code)} "
            f"({format_currency(result.total_paid, symbol, code)} pagado, "
            f"{format_percentage(result.payment_percentage)})"
        )
    return "\n".join(lines)


def format_summary(outcome: ReconciliationOutcome) -> str:
    """Summary answer, one block per currency group."""
    project = outcome.options.project_name
    title = "**Compromisos de pago de clientes**"
    if project:
        title += f' en **"{project}"**'

    blocks = [f"{title}:"]
    blocks.extend(format_group(group) for group in outcome.groups)
    return "\n\n".join(blocks).strip()


def format_outcome(outcome: ReconciliationOutcome) -> str:
    """Render any outcome as user-facing text."""
    if outcome.kind == OutcomeKind.EMPTY:
        return EMPTY_MESSAGES[outcome.reason](outcome)
    if outcome.kind == OutcomeKind.SINGLE:
        return format_detail(outcome.detail)
    return format_summary(outcome)
