"""
Monthly Summary Aggregation

Computes income and expense totals for one calendar month, with a
per-category breakdown for each kind.

GUARANTEES:
- Both ends of the month are inclusive
- Every fixed category appears in its breakdown, at zero if unused
- Unknown categories are still counted and get their own key
- sum(breakdown) == total for each kind
"""

import calendar
from collections.abc import Iterable
from datetime import MAXYEAR, MINYEAR, date
from decimal import Decimal
from typing import Optional

from expense_ledger.audit import AuditLogger
from expense_ledger.models.transaction import (
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    MonthlySummary,
    Transaction,
    TransactionKind,
)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of a month."""
    if not MINYEAR <= year <= MAXYEAR:
        raise ValueError(f"Year must be between {MINYEAR} and {MAXYEAR}, got {year}")
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def _seeded(categories: Iterable[str]) -> dict[str, Decimal]:
    return {category: Decimal("0") for category in categories}


class SummaryAggregator:
    """Builds MonthlySummary objects from a sequence of transactions."""

    def __init__(self, audit_logger: Optional[AuditLogger] = None):
        self._audit_logger = audit_logger

    def summarize(
        self,
        transactions: Iterable[Transaction],
        year: int,
        month: int,
    ) -> MonthlySummary:
        """
        Summarize the transactions dated inside (year, month).

        Raises:
            ValueError: If month is not in 1..12 or year is not in 1..9999.
        """
        start, end = month_bounds(year, month)

        total_income = Decimal("0")
        total_expense = Decimal("0")
        income_by_category = _seeded(INCOME_CATEGORIES)
        expense_by_category = _seeded(EXPENSE_CATEGORIES)
        count = 0

        for tx in transactions:
            if not start <= tx.date <= end:
                continue

            count += 1
            if tx.kind == TransactionKind.INCOME:
                total_income += tx.amount
                income_by_category[tx.category] = (
                    income_by_category.get(tx.category, Decimal("0")) + tx.amount
                )
            else:
                total_expense += tx.amount
                expense_by_category[tx.category] = (
                    expense_by_category.get(tx.category, Decimal("0")) + tx.amount
                )

        summary = MonthlySummary(
            year=year,
            month=month,
            total_income=total_income,
            total_expense=total_expense,
            income_by_category=income_by_category,
            expense_by_category=expense_by_category,
            transaction_count=count,
        )

        if self._audit_logger:
            self._audit_logger.log_summary_computed(
                year=year,
                month=month,
                transaction_count=count,
            )

        return summary


def summarize(
    transactions: Iterable[Transaction],
    year: int,
    month: int,
) -> MonthlySummary:
    """Summarize without audit logging."""
    return SummaryAggregator().summarize(transactions, year, month)
