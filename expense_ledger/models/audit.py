"""
Audit Models for the Expense Ledger

Every significant ledger operation is logged as an audit event:
adding a transaction, loading and saving the data file, importing,
and computing summaries.

DESIGN DECISION: Audit events are append-only. We never delete or modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Entry
    TRANSACTION_ADDED = "transaction_added"

    # Persistence
    LEDGER_LOADED = "ledger_loaded"
    LEDGER_LOAD_FAILED = "ledger_load_failed"
    LOAD_LINE_SKIPPED = "load_line_skipped"
    LEDGER_SAVED = "ledger_saved"
    SAVE_FAILED = "save_failed"

    # Import
    IMPORT_LINE_SKIPPED = "import_line_skipped"
    IMPORT_COMPLETED = "import_completed"
    IMPORT_FAILED = "import_failed"

    # Reporting
    SUMMARY_COMPUTED = "summary_computed"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    One thing that happened to the ledger.

    Built by AuditEventBuilder and handed to AuditLogger.log().
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'transaction', 'ledger', 'import')"
    )

    # Event details
    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Factory methods, one per AuditEventType.

    Usage:
        event = AuditEventBuilder.transaction_added("EXPENSE", "Food", "12.50", date_str)
        event = AuditEventBuilder.ledger_saved(path, count)
    """

    @staticmethod
    def transaction_added(
        kind: str,
        category: str,
        amount: str,
        on_date: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_ADDED,
            entity_type="transaction",
            description=f"{kind.capitalize()} added: {category} {amount} on {on_date}",
            details={
                "kind": kind,
                "category": category,
                "amount": amount,
                "date": on_date,
            },
            is_user_action=True,
        )

    @staticmethod
    def ledger_loaded(path: str, count: int, skipped: int = 0) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOADED,
            entity_type="ledger",
            description=f"Loaded {count} transactions from {path}",
            details={
                "path": path,
                "transaction_count": count,
                "skipped_count": skipped,
            },
        )

    @staticmethod
    def ledger_load_failed(path: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOAD_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="ledger",
            description=f"Failed to load ledger from {path}",
            details={"path": path},
            error_message=error_message,
        )

    @staticmethod
    def load_line_skipped(
        path: str,
        line_number: int,
        reason: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOAD_LINE_SKIPPED,
            severity=AuditSeverity.WARNING,
            entity_type="ledger",
            description=f"Skipped unreadable line {line_number} of {path}",
            details={
                "path": path,
                "line_number": line_number,
            },
            error_code=reason,
            error_message=error_message,
        )

    @staticmethod
    def ledger_saved(path: str, count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_SAVED,
            entity_type="ledger",
            description=f"Saved {count} transactions to {path}",
            details={
                "path": path,
                "transaction_count": count,
            },
        )

    @staticmethod
    def save_failed(path: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="ledger",
            description=f"Failed to save ledger to {path}",
            details={"path": path},
            error_message=error_message,
        )

    @staticmethod
    def import_line_skipped(
        path: str,
        line_number: int,
        reason: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.IMPORT_LINE_SKIPPED,
            severity=AuditSeverity.WARNING,
            entity_type="import",
            description=f"Skipped line {line_number} of {path}",
            details={
                "path": path,
                "line_number": line_number,
            },
            error_code=reason,
            error_message=error_message,
        )

    @staticmethod
    def import_completed(path: str, imported: int, skipped: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.IMPORT_COMPLETED,
            severity=AuditSeverity.WARNING if skipped else AuditSeverity.INFO,
            entity_type="import",
            description=f"Imported {imported} transactions from {path} ({skipped} skipped)",
            details={
                "path": path,
                "imported_count": imported,
                "skipped_count": skipped,
            },
            is_user_action=True,
        )

    @staticmethod
    def import_failed(path: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.IMPORT_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="import",
            description=f"Import from {path} failed",
            details={"path": path},
            error_message=error_message,
            is_user_action=True,
        )

    @staticmethod
    def summary_computed(
        year: int,
        month: int,
        transaction_count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SUMMARY_COMPUTED,
            entity_type="summary",
            description=f"Summary for {year}-{month:02d} covered {transaction_count} transactions",
            details={
                "year": year,
                "month": month,
                "transaction_count": transaction_count,
            },
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
        )
