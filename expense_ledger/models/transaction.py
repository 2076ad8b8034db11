"""
Core Data Models for the Expense Ledger

These models define the schemas for all data flowing through the ledger:
1. Transaction - one recorded income or expense
2. MonthlySummary - totals and per-category breakdowns for a month
3. ImportResult - outcome of a bulk import, including skipped rows

DESIGN DECISION: Transactions are frozen Pydantic models.
Once built they are never edited; the ledger only ever appends.
"""

import calendar
import datetime as dt
from datetime import date
from decimal import Decimal
from enum import Enum

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionKind(str, Enum):
    """
    Kind of a transaction.

    The value is also the tag written to the first column of the data file.
    """
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class DecodeErrorReason(str, Enum):
    """Why a delimited row could not be turned into a Transaction."""
    MALFORMED_ROW = "malformed_row"
    BAD_AMOUNT = "bad_amount"
    BAD_DATE = "bad_date"
    BAD_KIND = "bad_kind"


# =============================================================================
# CATEGORIES
# =============================================================================

# Order matters: it is the numbering shown in the entry menu and the
# order of the pre-seeded keys in a monthly breakdown.
INCOME_CATEGORIES: tuple[str, ...] = (
    "Salary",
    "Business",
    "Investment",
    "Gift",
    "Other",
)

EXPENSE_CATEGORIES: tuple[str, ...] = (
    "Food",
    "Rent",
    "Travel",
    "Utilities",
    "Entertainment",
    "Shopping",
    "Healthcare",
    "Education",
    "Other",
)


def categories_for(kind: TransactionKind) -> tuple[str, ...]:
    """Fixed category list offered for a transaction kind."""
    if kind == TransactionKind.INCOME:
        return INCOME_CATEGORIES
    return EXPENSE_CATEGORIES


# =============================================================================
# CORE TRANSACTION MODEL
# =============================================================================

class Transaction(BaseModel):
    """
    A single income or expense record.

    NOTE: Category membership is NOT enforced here. Rows loaded from
    disk or imported from other files may carry any category string,
    and the summary code accepts them as-is.

    The amount is not sign-checked either; nothing upstream ever
    rejected negative or zero amounts.
    """
    model_config = ConfigDict(frozen=True)

    kind: TransactionKind = Field(
        ...,
        description="INCOME or EXPENSE"
    )
    category: str = Field(
        ...,
        description="Category name (free text)"
    )
    amount: Decimal = Field(
        ...,
        description="Amount of money moved"
    )
    date: dt.date = Field(
        ...,
        description="Calendar date of the transaction"
    )
    description: str = Field(
        default="",
        description="Optional free-form note; may contain commas"
    )

    @field_validator('amount')
    @classmethod
    def amount_must_be_finite(cls, v: Decimal) -> Decimal:
        """Reject NaN and infinities."""
        if not v.is_finite():
            raise ValueError(f"Amount must be a finite number, got {v}")
        return v

    @field_validator('description')
    @classmethod
    def description_single_line(cls, v: str) -> str:
        """A row is one line of the data file."""
        if "\n" in v or "\r" in v:
            raise ValueError("Description must not contain line breaks")
        return v

    @property
    def is_income(self) -> bool:
        return self.kind == TransactionKind.INCOME

    @property
    def is_expense(self) -> bool:
        return self.kind == TransactionKind.EXPENSE


# =============================================================================
# SUMMARY MODELS
# =============================================================================

class MonthlySummary(BaseModel):
    """
    Totals and per-category breakdowns for a single calendar month.

    Breakdown maps always contain every fixed category for their kind,
    even at zero, plus any extra categories seen in the month.
    """

    year: int = Field(..., ge=1, le=9999)
    month: int = Field(..., ge=1, le=12)

    total_income: Decimal = Field(default=Decimal("0"))
    total_expense: Decimal = Field(default=Decimal("0"))

    income_by_category: dict[str, Decimal] = Field(default_factory=dict)
    expense_by_category: dict[str, Decimal] = Field(default_factory=dict)

    transaction_count: int = Field(
        default=0,
        ge=0,
        description="Number of transactions that fell inside the month"
    )

    @property
    def balance(self) -> Decimal:
        """Income minus expense for the month."""
        return self.total_income - self.total_expense

    @property
    def period_start(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def period_end(self) -> date:
        last_day = calendar.monthrange(self.year, self.month)[1]
        return date(self.year, self.month, last_day)

    @property
    def period_label(self) -> str:
        """e.g. 'January 2025'."""
        return f"{calendar.month_name[self.month]} {self.year}"

    def nonzero_income_breakdown(self) -> dict[str, Decimal]:
        """Income categories to display (zero sums are hidden)."""
        return {k: v for k, v in self.income_by_category.items() if v != 0}

    def nonzero_expense_breakdown(self) -> dict[str, Decimal]:
        """Expense categories to display (zero sums are hidden)."""
        return {k: v for k, v in self.expense_by_category.items() if v != 0}


# =============================================================================
# IMPORT MODELS
# =============================================================================

class SkippedLine(BaseModel):
    """A row of an import file that was rejected."""

    line_number: int = Field(
        ...,
        ge=1,
        description="1-based line number in the file (header is line 1)"
    )
    content: str = Field(
        ...,
        description="Raw text of the rejected line"
    )
    reason: DecodeErrorReason
    message: str = Field(
        ...,
        description="Human-readable diagnostic"
    )


class ImportResult(BaseModel):
    """
    Outcome of importing one external file.

    A file with bad rows still produces a result; bad rows are listed
    in `skipped_lines` instead of failing the whole import.
    """

    source_path: str
    imported_count: int = Field(default=0, ge=0)
    skipped_lines: list[SkippedLine] = Field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped_lines)
