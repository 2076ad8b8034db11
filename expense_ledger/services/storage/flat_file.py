"""
Flat File Storage Implementation

DESIGN DECISION: Transactions live in a single UTF-8 text file, one
comma-delimited row per transaction under a fixed header line.
Every save rewrites the whole file from the in-memory ledger.

TRADEOFFS:
- The file is the single source of truth; last full save wins
- No locking: exactly one process is expected to use the file
- No temp-file-and-rename: a crash mid-write can truncate the file
"""

from collections.abc import Iterable
from pathlib import Path
from typing import Optional, Union

from expense_ledger.audit import AuditLogger
from expense_ledger.codec import DecodeError, RowCodec
from expense_ledger.config.settings import LoadErrorPolicy
from expense_ledger.models.transaction import Transaction
from expense_ledger.services.storage.interface import (
    LedgerLoadError,
    StorageReadError,
    StorageWriteError,
    TransactionStorageInterface,
)


class FlatFileTransactionStorage(TransactionStorageInterface):
    """
    Delimited text file implementation of transaction storage.

    The first line of the file is always a header and is skipped on read
    without being checked.
    """

    def __init__(
        self,
        path: Union[str, Path],
        codec: Optional[RowCodec] = None,
        encoding: str = "utf-8",
        on_load_error: LoadErrorPolicy = LoadErrorPolicy.ABORT,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._path = Path(path)
        self._codec = codec or RowCodec()
        self._encoding = encoding
        self._on_load_error = LoadErrorPolicy(on_load_error)
        self._audit_logger = audit_logger
        self._last_skipped_count = 0

    @property
    def path(self) -> Path:
        return self._path

    @property
    def location(self) -> str:
        return str(self._path)

    @property
    def last_skipped_count(self) -> int:
        return self._last_skipped_count

    def exists(self) -> bool:
        return self._path.is_file()

    def load(self) -> list[Transaction]:
        """
        Read the file, skipping the header and blank lines.

        A missing file is an empty ledger, not an error.
        """
        self._last_skipped_count = 0
        if not self.exists():
            return []

        transactions = []
        try:
            with open(self._path, "r", encoding=self._encoding, newline="") as f:
                for line_number, line in enumerate(f, start=1):
                    if line_number == 1 or not line.strip():
                        continue
                    try:
                        transactions.append(self._codec.decode(line))
                    except DecodeError as e:
                        self._handle_bad_line(line_number, e)
        except (OSError, UnicodeDecodeError) as e:
            raise StorageReadError(f"Failed to read {self._path}: {e}") from e

        return transactions

    def _handle_bad_line(self, line_number: int, error: DecodeError) -> None:
        if self._on_load_error == LoadErrorPolicy.ABORT:
            raise LedgerLoadError(
                f"Line {line_number} of {self._path} is not a valid transaction: {error.message}",
                line_number=line_number,
                decode_error=error,
            ) from error

        self._last_skipped_count += 1
        if self._audit_logger:
            self._audit_logger.log_load_line_skipped(
                path=self.location,
                line_number=line_number,
                reason=error.reason.value,
                error_message=error.message,
            )

    def save(self, transactions: Iterable[Transaction]) -> None:
        """Overwrite the file with a header plus one row per transaction."""
        rows = [self._codec.header]
        rows.extend(self._codec.encode(tx) for tx in transactions)

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, "w", encoding=self._encoding, newline="") as f:
                for row in rows:
                    f.write(row + "\n")
        except OSError as e:
            raise StorageWriteError(f"Failed to write {self._path}: {e}") from e
