"""Services package."""

from expense_ledger.services.storage import (
    FlatFileTransactionStorage,
    LedgerLoadError,
    NotFoundError,
    StorageError,
    StorageReadError,
    StorageWriteError,
    TransactionStorageInterface,
)

__all__ = [
    "FlatFileTransactionStorage",
    "LedgerLoadError",
    "NotFoundError",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    "TransactionStorageInterface",
]
