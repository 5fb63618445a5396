from .aggregator import EscapementAggregator, SummaryRow, summary_rows

__all__ = [
    "EscapementAggregator",
    "SummaryRow",
    "summary_rows",
]
