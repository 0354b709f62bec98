"""Presentation of reconciliation outcomes."""

from .formatter import (
    format_currency,
    format_detail,
    format_number,
    format_outcome,
    format_summary,
)

__all__ = [
    "format_currency",
    "format_detail",
    "format_number",
    "format_outcome",
    "format_summary",
]
