"""
Bulk Import

Reads transactions from an external file in the ledger's own row format
and adds the good ones to the ledger.

DESIGN DECISION: A bad row never fails the import. It is recorded as a
SkippedLine with the reason it was rejected, and processing moves on to
the next row. Only a missing or unreadable file fails the whole import.

Differences from the startup load:
- The type column is case-insensitive ("income" is accepted)
- Rows are added in memory first, then the ledger is saved once
- A line with undecodable bytes is skipped, not fatal
"""

from pathlib import Path
from typing import Optional, Union

from expense_ledger.audit import AuditLogger
from expense_ledger.codec import DecodeError, RowCodec
from expense_ledger.ledger import Ledger
from expense_ledger.models.transaction import (
    DecodeErrorReason,
    ImportResult,
    SkippedLine,
    Transaction,
)
from expense_ledger.services.storage import NotFoundError, StorageReadError


class ImportFileNotFoundError(NotFoundError):
    """The file to import does not exist."""
    pass


class TransactionImporter:
    """Imports delimited transaction files into a Ledger."""

    def __init__(
        self,
        ledger: Ledger,
        codec: Optional[RowCodec] = None,
        encoding: str = "utf-8",
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._ledger = ledger
        self._codec = codec or RowCodec()
        self._encoding = encoding
        self._audit_logger = audit_logger

    def import_file(self, path: Union[str, Path]) -> ImportResult:
        """
        Import every valid row of `path` into the ledger.

        The first line is treated as a header and skipped. Blank lines are
        ignored. Each line is decoded separately, so a line that is not
        valid text is skipped like any other bad row. The ledger is saved
        once, after all rows are processed.

        Raises:
            ImportFileNotFoundError: If `path` is not an existing file.
            StorageReadError: If the file cannot be read.
            StorageWriteError: If the final save fails. The imported
                transactions stay in memory.
        """
        source = Path(path)
        if not source.is_file():
            message = f"File not found: {source}"
            if self._audit_logger:
                self._audit_logger.log_import_failed(path=str(source), error_message=message)
            raise ImportFileNotFoundError(message)

        imported: list[Transaction] = []
        skipped: list[SkippedLine] = []

        try:
            with open(source, "rb") as f:
                for line_number, raw in enumerate(f, start=1):
                    if line_number == 1:
                        continue
                    try:
                        line = raw.decode(self._encoding)
                    except UnicodeDecodeError as e:
                        skipped.append(self._skip(
                            source,
                            line_number,
                            raw.decode(self._encoding, errors="replace"),
                            DecodeError(
                                DecodeErrorReason.MALFORMED_ROW,
                                f"Line is not valid {self._encoding} text: {e.reason}",
                            ),
                        ))
                        continue
                    if not line.strip():
                        continue
                    try:
                        imported.append(self._codec.decode(line, normalize_kind=True))
                    except DecodeError as e:
                        skipped.append(self._skip(source, line_number, line, e))
        except OSError as e:
            if self._audit_logger:
                self._audit_logger.log_import_failed(path=str(source), error_message=str(e))
            raise StorageReadError(f"Failed to read {source}: {e}") from e

        self._ledger.extend(imported)
        self._ledger.save_all()

        if self._audit_logger:
            self._audit_logger.log_import_completed(
                path=str(source),
                imported=len(imported),
                skipped=len(skipped),
            )

        return ImportResult(
            source_path=str(source),
            imported_count=len(imported),
            skipped_lines=skipped,
        )

    def _skip(
        self,
        source: Path,
        line_number: int,
        line: str,
        error: DecodeError,
    ) -> SkippedLine:
        if self._audit_logger:
            self._audit_logger.log_import_line_skipped(
                path=str(source),
                line_number=line_number,
                reason=error.reason.value,
                error_message=error.message,
            )
        return SkippedLine(
            line_number=line_number,
            content=line.rstrip("\r\n"),
            reason=error.reason,
            message=error.message,
        )
