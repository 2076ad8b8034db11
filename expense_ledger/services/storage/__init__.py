"""
Storage Services Package

Provides the abstract storage interface and the flat-file implementation
used for the ledger's data file.
"""

from expense_ledger.services.storage.interface import (
    LedgerLoadError,
    NotFoundError,
    StorageError,
    StorageReadError,
    StorageWriteError,
    TransactionStorageInterface,
)
from expense_ledger.services.storage.flat_file import FlatFileTransactionStorage

__all__ = [
    # Interfaces
    "TransactionStorageInterface",
    # Exceptions
    "LedgerLoadError",
    "NotFoundError",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    # Flat file implementation
    "FlatFileTransactionStorage",
]
