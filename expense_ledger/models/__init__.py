"""
Data Models Package

This package contains all Pydantic models used by the Expense Ledger.
All data flowing through the system must conform to these schemas.
"""

from expense_ledger.models.transaction import (
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    DecodeErrorReason,
    ImportResult,
    MonthlySummary,
    SkippedLine,
    Transaction,
    TransactionKind,
    categories_for,
)
from expense_ledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Transaction models
    "EXPENSE_CATEGORIES",
    "INCOME_CATEGORIES",
    "DecodeErrorReason",
    "ImportResult",
    "MonthlySummary",
    "SkippedLine",
    "Transaction",
    "TransactionKind",
    "categories_for",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
