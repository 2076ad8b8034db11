"""Reporting queries package."""

from expense_ledger.queries.summary import SummaryAggregator, month_bounds, summarize

__all__ = ["SummaryAggregator", "month_bounds", "summarize"]
