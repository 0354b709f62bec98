"""Reconciliation engine components."""

from .currency import convert, CurrencyIndex
from .filters import CommitmentFilterPipeline, FilterOutcome, filter_by_currency
from .aggregator import CommitmentAggregator, UNKNOWN_CLIENT, UNKNOWN_PROJECT
from .reexpression import DisplayCurrencyConverter, ReexpressionOutcome
from .summarizer import group_by_currency
from .engine import ReconciliationEngine

__all__ = [
    "convert",
    "CurrencyIndex",
    "CommitmentFilterPipeline",
    "FilterOutcome",
    "filter_by_currency",
    "CommitmentAggregator",
    "UNKNOWN_CLIENT",
    "UNKNOWN_PROJECT",
    "DisplayCurrencyConverter",
    "ReexpressionOutcome",
    "group_by_currency",
    "ReconciliationEngine",
]
