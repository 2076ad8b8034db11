"""Tests for monthly aggregation."""

import pytest
from datetime import date
from decimal import Decimal

from expense_ledger.models.audit import AuditEventType
from expense_ledger.models.transaction import (
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    TransactionKind,
)
from expense_ledger.queries import SummaryAggregator, month_bounds, summarize

from conftest import make_tx


def income(category="Salary", amount="100", on_date=date(2024, 3, 10)):
    return make_tx(kind=TransactionKind.INCOME, category=category, amount=amount, on_date=on_date)


def expense(category="Food", amount="10", on_date=date(2024, 3, 10)):
    return make_tx(kind=TransactionKind.EXPENSE, category=category, amount=amount, on_date=on_date)


class TestMonthBounds:
    """Tests for month_bounds()."""

    def test_regular_month(self):
        assert month_bounds(2024, 4) == (date(2024, 4, 1), date(2024, 4, 30))

    def test_leap_february(self):
        assert month_bounds(2024, 2)[1] == date(2024, 2, 29)
        assert month_bounds(2023, 2)[1] == date(2023, 2, 28)

    @pytest.mark.parametrize("month", [0, 13, -1])
    def test_invalid_month(self, month):
        with pytest.raises(ValueError):
            month_bounds(2024, month)

    @pytest.mark.parametrize("year", [0, -1, 10000])
    def test_year_outside_calendar_range(self, year):
        with pytest.raises(ValueError, match="Year must be between"):
            month_bounds(year, 1)


class TestSummarize:
    """Tests for the aggregator itself."""

    def test_totals_and_balance(self):
        summary = summarize(
            [
                income(amount="1500.00"),
                income(category="Gift", amount="50.25"),
                expense(amount="120.10"),
                expense(category="Rent", amount="800"),
            ],
            2024,
            3,
        )
        assert summary.total_income == Decimal("1550.25")
        assert summary.total_expense == Decimal("920.10")
        assert summary.balance == Decimal("630.15")
        assert summary.transaction_count == 4

    def test_breakdowns_sum_to_totals(self):
        summary = summarize(
            [income(), income(category="Business", amount="7.5"), expense(), expense(category="Travel")],
            2024,
            3,
        )
        assert sum(summary.income_by_category.values()) == summary.total_income
        assert sum(summary.expense_by_category.values()) == summary.total_expense

    def test_month_edges_are_inclusive(self):
        summary = summarize(
            [
                expense(amount="1", on_date=date(2024, 2, 29)),
                expense(amount="2", on_date=date(2024, 3, 1)),
                expense(amount="4", on_date=date(2024, 3, 31)),
                expense(amount="8", on_date=date(2024, 4, 1)),
            ],
            2024,
            3,
        )
        assert summary.total_expense == Decimal("6")
        assert summary.transaction_count == 2

    def test_other_years_excluded(self):
        summary = summarize([income(on_date=date(2023, 3, 10))], 2024, 3)
        assert summary.total_income == Decimal("0")

    def test_empty_ledger_has_seeded_zero_categories(self):
        summary = summarize([], 2024, 3)
        assert summary.total_income == Decimal("0")
        assert summary.total_expense == Decimal("0")
        assert list(summary.income_by_category) == list(INCOME_CATEGORIES)
        assert list(summary.expense_by_category) == list(EXPENSE_CATEGORIES)
        assert all(value == 0 for value in summary.income_by_category.values())
        assert summary.nonzero_income_breakdown() == {}
        assert summary.nonzero_expense_breakdown() == {}

    def test_unknown_category_gets_its_own_key(self):
        summary = summarize([income(category="Crypto", amount="3")], 2024, 3)
        assert summary.income_by_category["Crypto"] == Decimal("3")
        assert summary.total_income == Decimal("3")

    def test_category_from_the_other_list(self):
        """An income tagged 'Food' lands in the income breakdown."""
        summary = summarize([income(category="Food", amount="5")], 2024, 3)
        assert summary.income_by_category["Food"] == Decimal("5")
        assert summary.expense_by_category["Food"] == Decimal("0")

    def test_negative_amounts_are_summed(self):
        summary = summarize([expense(amount="10"), expense(amount="-3")], 2024, 3)
        assert summary.total_expense == Decimal("7")

    def test_offsetting_amounts_hidden_from_breakdown(self):
        summary = summarize([expense(amount="10"), expense(amount="-10")], 2024, 3)
        assert "Food" not in summary.nonzero_expense_breakdown()
        assert summary.transaction_count == 2

    def test_invalid_month_raises(self):
        with pytest.raises(ValueError):
            summarize([], 2024, 13)

    def test_invalid_year_raises(self):
        with pytest.raises(ValueError):
            summarize([], 10000, 1)

    def test_decimal_precision(self):
        summary = summarize([expense(amount="0.1"), expense(amount="0.2")], 2024, 3)
        assert summary.total_expense == Decimal("0.3")


class TestAggregatorAudit:
    """The aggregator records what it computed."""

    def test_logs_summary_event(self, audit_logger):
        SummaryAggregator(audit_logger=audit_logger).summarize([income(), expense()], 2024, 3)
        event = audit_logger.recent_events(1)[0]
        assert event.event_type == AuditEventType.SUMMARY_COMPUTED
        assert event.details == {"year": 2024, "month": 3, "transaction_count": 2}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
