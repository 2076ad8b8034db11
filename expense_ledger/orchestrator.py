"""
Main Orchestrator for the Expense Ledger

This module ties the components together behind the small interface the
command line uses:

1. add_transaction   (construct -> append -> durable save)
2. list_all          (insertion-order snapshot)
3. monthly_summary   (aggregate one month)
4. import_from_file  (bulk import with per-row skipping)
5. load_on_startup / persist  (lifecycle hooks)

DESIGN DECISION: The ledger is an explicit object owned by the service and
handed to the CLI. There is no module-level transaction list.
"""

from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Optional, Union

from expense_ledger.audit import AuditLogger
from expense_ledger.codec import RowCodec
from expense_ledger.config import Settings, get_settings
from expense_ledger.importing import TransactionImporter
from expense_ledger.ledger import Ledger
from expense_ledger.models.transaction import (
    ImportResult,
    MonthlySummary,
    Transaction,
    TransactionKind,
)
from expense_ledger.queries import SummaryAggregator, month_bounds
from expense_ledger.services.storage import FlatFileTransactionStorage


class LedgerService:
    """
    Facade over the ledger, importer and aggregator.

    Every method runs to completion before returning; there is no
    background work.
    """

    def __init__(
        self,
        ledger: Ledger,
        importer: Optional[TransactionImporter] = None,
        aggregator: Optional[SummaryAggregator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._ledger = ledger
        self._importer = importer or TransactionImporter(ledger, audit_logger=audit_logger)
        self._aggregator = aggregator or SummaryAggregator(audit_logger)
        self._audit_logger = audit_logger

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    def load_on_startup(self) -> list[Transaction]:
        """Load the persisted ledger. Failures are terminal to the load."""
        return self._ledger.load_all()

    def persist(self) -> None:
        """Write the whole ledger to storage."""
        self._ledger.save_all()

    def add_transaction(
        self,
        kind: TransactionKind,
        category: str,
        amount: Decimal,
        on_date: date,
        description: str = "",
    ) -> Transaction:
        """
        Record a user-entered transaction.

        CRITICAL: The ledger is saved before this returns, so the entry is
        durable before the next prompt. A failed save raises
        StorageWriteError.
        """
        transaction = Transaction(
            kind=kind,
            category=category,
            amount=amount,
            date=on_date,
            description=description,
        )

        self._ledger.append(transaction)

        if self._audit_logger:
            self._audit_logger.log_transaction_added(
                kind=transaction.kind.value,
                category=transaction.category,
                amount=str(transaction.amount),
                on_date=transaction.date.isoformat(),
            )

        return transaction

    def list_all(self) -> tuple[Transaction, ...]:
        return self._ledger.all()

    def monthly_summary(self, year: int, month: int) -> MonthlySummary:
        """
        Summarize one calendar month.

        Raises:
            ValueError: If year or month is out of range.
        """
        start, end = month_bounds(year, month)
        return self._aggregator.summarize(self._ledger.between(start, end), year, month)

    def import_from_file(self, path: Union[str, Path]) -> ImportResult:
        return self._importer.import_file(path)


def create_app_components(
    settings: Optional[Settings] = None,
    data_file: Optional[Union[str, Path]] = None,
    audit_logger: Optional[AuditLogger] = None,
) -> LedgerService:
    """
    Factory function to wire the application from configuration.

    Args:
        settings: Settings to use; defaults to the cached global settings.
        data_file: Overrides the configured data file path.
        audit_logger: Shared audit logger; a new one is created if omitted.

    Returns:
        A LedgerService with an empty (not yet loaded) ledger.
    """
    ledger_settings = (settings or get_settings()).ledger
    audit_logger = audit_logger or AuditLogger()
    codec = RowCodec()

    storage = FlatFileTransactionStorage(
        path=data_file or ledger_settings.data_file,
        codec=codec,
        encoding=ledger_settings.file_encoding,
        on_load_error=ledger_settings.on_load_error,
        audit_logger=audit_logger,
    )
    ledger = Ledger(storage, audit_logger=audit_logger)
    importer = TransactionImporter(
        ledger,
        codec=codec,
        encoding=ledger_settings.file_encoding,
        audit_logger=audit_logger,
    )

    return LedgerService(
        ledger=ledger,
        importer=importer,
        aggregator=SummaryAggregator(audit_logger),
        audit_logger=audit_logger,
    )
