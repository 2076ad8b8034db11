"""
Abstract Storage Interface

DESIGN DECISION: The ledger talks to its persisted store through this
interface only. The single implementation is a flat text file, and tests
can substitute an in-memory store.

The interface is intentionally tiny: the whole file is the unit of
persistence, so there is only "read everything" and "write everything".
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Optional

from expense_ledger.codec import DecodeError
from expense_ledger.models.transaction import Transaction


class TransactionStorageInterface(ABC):
    """
    Abstract interface for transaction persistence.

    Any storage implementation must implement these methods.
    """

    @property
    @abstractmethod
    def location(self) -> str:
        """Human-readable description of where data lives (e.g. a path)."""
        pass

    @property
    def last_skipped_count(self) -> int:
        """
        Rows the most recent load() skipped instead of failing.

        Stores that never skip rows keep the default of 0.
        """
        return 0

    @abstractmethod
    def exists(self) -> bool:
        """Whether the store has been written before."""
        pass

    @abstractmethod
    def load(self) -> list[Transaction]:
        """
        Read every persisted transaction in stored order.

        Returns:
            The transactions; an empty list if nothing was stored yet.

        Raises:
            StorageReadError: If the store cannot be read
            LedgerLoadError: If a stored row cannot be decoded
        """
        pass

    @abstractmethod
    def save(self, transactions: Iterable[Transaction]) -> None:
        """
        Replace the stored contents with `transactions`, in order.

        Raises:
            StorageWriteError: If the write cannot complete
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """A file that must exist does not."""
    pass


class StorageReadError(StorageError):
    """The store could not be read."""
    pass


class StorageWriteError(StorageError):
    """The store could not be written."""
    pass


class LedgerLoadError(StorageError):
    """A persisted row could not be decoded, so the load was aborted."""

    def __init__(
        self,
        message: str,
        line_number: Optional[int] = None,
        decode_error: Optional[DecodeError] = None,
    ):
        self.line_number = line_number
        self.decode_error = decode_error
        super().__init__(message)
