"""
Ledger

The in-memory, insertion-ordered collection of every known transaction,
backed by a storage implementation.

PERSISTENCE RULES:
- append() saves the whole ledger immediately, so an entry is on disk
  before the user is prompted again
- extend() only touches memory; the caller decides when to save_all()
- load_all() either loads every row or (by default) nothing at all
"""

from collections.abc import Iterable, Iterator
from datetime import date
from typing import Optional

from expense_ledger.audit import AuditLogger
from expense_ledger.models.transaction import Transaction
from expense_ledger.services.storage import (
    StorageError,
    StorageWriteError,
    TransactionStorageInterface,
)


class Ledger:
    """
    Ordered list of transactions plus whole-store persistence.

    Order is the order transactions were added or loaded, never date
    order. Transactions are never edited or removed.
    """

    def __init__(
        self,
        storage: TransactionStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._audit_logger = audit_logger
        self._transactions: list[Transaction] = []

    @property
    def storage(self) -> TransactionStorageInterface:
        return self._storage

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(tuple(self._transactions))

    def all(self) -> tuple[Transaction, ...]:
        """Read-only snapshot in insertion order."""
        return tuple(self._transactions)

    def append(self, transaction: Transaction) -> None:
        """
        Add a transaction and rewrite the store.

        If the save fails, the transaction stays in memory and
        StorageWriteError propagates; the next successful save
        writes it out.
        """
        self._transactions.append(transaction)
        self.save_all()

    def extend(self, transactions: Iterable[Transaction]) -> int:
        """Add transactions in memory only. Returns how many were added."""
        added = list(transactions)
        self._transactions.extend(added)
        return len(added)

    def load_all(self) -> list[Transaction]:
        """
        Append every stored transaction, in file order.

        Any failure leaves the in-memory ledger untouched.

        Returns:
            The transactions that were loaded.
        """
        try:
            loaded = self._storage.load()
        except StorageError as e:
            if self._audit_logger:
                self._audit_logger.log_ledger_load_failed(
                    path=self._storage.location,
                    error_message=str(e),
                )
            raise

        self._transactions.extend(loaded)

        if self._audit_logger:
            self._audit_logger.log_ledger_loaded(
                path=self._storage.location,
                count=len(loaded),
                skipped=self._storage.last_skipped_count,
            )
        return loaded

    def save_all(self) -> None:
        """Rewrite the store from the current in-memory sequence."""
        try:
            self._storage.save(self._transactions)
        except StorageWriteError as e:
            if self._audit_logger:
                self._audit_logger.log_save_failed(
                    path=self._storage.location,
                    error_message=str(e),
                )
            raise

        if self._audit_logger:
            self._audit_logger.log_ledger_saved(
                path=self._storage.location,
                count=len(self._transactions),
            )

    def between(self, start: date, end: date) -> list[Transaction]:
        """Transactions dated within [start, end], in insertion order."""
        return [tx for tx in self._transactions if start <= tx.date <= end]
