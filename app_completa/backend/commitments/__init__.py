"""Client commitments reconciliation: paid, remaining and progress per commitment."""

__version__ = "1.0.0"
