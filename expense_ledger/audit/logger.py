"""
Audit Logger

DESIGN DECISION: Every significant ledger operation is logged.
This provides:
1. Traceability of what was added, loaded, saved and imported
2. Debugging capability when a data file turns out to be corrupt
3. A record of skipped import rows beyond what the CLI prints

The audit logger:
- Is synchronous; the ledger does one thing at a time
- Never raises because of logging itself
- Keeps a bounded in-memory history of recent events
"""

import logging
import sys
from collections import deque
from typing import Optional, Union

import structlog

from expense_ledger.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=False,
)


def configure_logging(level: Union[int, str] = logging.WARNING) -> None:
    """
    Route stdlib logging (and therefore structlog) to stderr at `level`.

    Call once from the CLI entrypoint. Library code never configures handlers.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.strip().upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        stream=sys.stderr,
        force=True,
    )


class AuditLogger:
    """
    Central audit logging service.

    Logs events to the structured local log and keeps the most recent
    ones in memory for inspection.
    """

    def __init__(self, history_size: int = 200):
        """
        Initialize audit logger.

        Args:
            history_size: How many recent events to keep in memory.
        """
        self._logger = structlog.get_logger("expense_ledger.audit")
        self._history: deque[AuditEvent] = deque(maxlen=history_size)

    def log(self, event: AuditEvent) -> None:
        """
        Log an audit event.

        Severity decides the log method: error and critical go to
        `error`, warning to `warning`, debug to `debug` and info to `info`.
        """
        self._history.append(event)
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def recent_events(self, limit: Optional[int] = None) -> list[AuditEvent]:
        """Most recent events, newest first."""
        events = list(reversed(self._history))
        if limit is not None:
            return events[:limit]
        return events

    def log_transaction_added(
        self,
        kind: str,
        category: str,
        amount: str,
        on_date: str,
    ) -> None:
        """Log a transaction entered by the user."""
        self.log(AuditEventBuilder.transaction_added(
            kind=kind,
            category=category,
            amount=amount,
            on_date=on_date,
        ))

    def log_ledger_loaded(self, path: str, count: int, skipped: int = 0) -> None:
        self.log(AuditEventBuilder.ledger_loaded(path=path, count=count, skipped=skipped))

    def log_ledger_load_failed(self, path: str, error_message: str) -> None:
        self.log(AuditEventBuilder.ledger_load_failed(path=path, error_message=error_message))

    def log_load_line_skipped(
        self,
        path: str,
        line_number: int,
        reason: str,
        error_message: str,
    ) -> None:
        self.log(AuditEventBuilder.load_line_skipped(
            path=path,
            line_number=line_number,
            reason=reason,
            error_message=error_message,
        ))

    def log_ledger_saved(self, path: str, count: int) -> None:
        self.log(AuditEventBuilder.ledger_saved(path=path, count=count))

    def log_save_failed(self, path: str, error_message: str) -> None:
        self.log(AuditEventBuilder.save_failed(path=path, error_message=error_message))

    def log_import_line_skipped(
        self,
        path: str,
        line_number: int,
        reason: str,
        error_message: str,
    ) -> None:
        """Log one rejected row of an import file."""
        self.log(AuditEventBuilder.import_line_skipped(
            path=path,
            line_number=line_number,
            reason=reason,
            error_message=error_message,
        ))

    def log_import_completed(self, path: str, imported: int, skipped: int) -> None:
        self.log(AuditEventBuilder.import_completed(
            path=path,
            imported=imported,
            skipped=skipped,
        ))

    def log_import_failed(self, path: str, error_message: str) -> None:
        self.log(AuditEventBuilder.import_failed(path=path, error_message=error_message))

    def log_summary_computed(self, year: int, month: int, transaction_count: int) -> None:
        self.log(AuditEventBuilder.summary_computed(
            year=year,
            month=month,
            transaction_count=transaction_count,
        ))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
        ))
