"""
Row Codec

Turns a Transaction into one line of comma-delimited text and back.

Row layout:

    TYPE,CATEGORY,AMOUNT,DATE,DESCRIPTION

Commas inside the description are written as the sentinel ``;;`` and
turned back into commas on the way in. Descriptions never contain line
breaks; the Transaction model rejects them.

Amounts are plain ASCII decimals (optional sign, optional fraction) and
dates are ASCII YYYY-MM-DD.

KNOWN LIMITATION: the escaping is lossy. A description that already
contains ``;;`` reads back with a comma in its place, and a raw comma in
a hand-edited file is kept as a comma (the trailing fields are rejoined).
"""

import re
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import ValidationError

from expense_ledger.models.transaction import (
    DecodeErrorReason,
    Transaction,
    TransactionKind,
)


HEADER = "TYPE,CATEGORY,AMOUNT,DATE,DESCRIPTION"
DELIMITER = ","
SENTINEL = ";;"
DATE_FORMAT = "%Y-%m-%d"

MIN_FIELDS = 4

DATE_PATTERN = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")
AMOUNT_PATTERN = re.compile(r"^[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)$")


class DecodeError(ValueError):
    """A line could not be decoded into a Transaction."""

    def __init__(
        self,
        reason: DecodeErrorReason,
        message: str,
        line: Optional[str] = None,
    ):
        self.reason = reason
        self.message = message
        self.line = line
        super().__init__(message)


class RowCodec:
    """
    Encoder/decoder between Transaction and a delimited text row.

    Stateless; one instance can be shared by the storage and the importer.
    """

    header = HEADER

    def encode(self, transaction: Transaction) -> str:
        """Render a transaction as a row (no trailing newline)."""
        return DELIMITER.join([
            transaction.kind.value,
            transaction.category,
            str(transaction.amount),
            transaction.date.strftime(DATE_FORMAT),
            transaction.description.replace(DELIMITER, SENTINEL),
        ])

    def decode(self, line: str, *, normalize_kind: bool = False) -> Transaction:
        """
        Parse a row into a Transaction.

        Args:
            line: One line of the file, with or without its line ending.
            normalize_kind: Uppercase the type column before checking it.
                Import files use this; the ledger's own file does not.

        Raises:
            DecodeError: with the reason of the first check that failed.
        """
        text = line.rstrip("\r\n")
        parts = text.split(DELIMITER)

        if len(parts) < MIN_FIELDS:
            raise DecodeError(
                DecodeErrorReason.MALFORMED_ROW,
                f"Expected at least {MIN_FIELDS} fields, found {len(parts)}",
                line=text,
            )

        kind = self._parse_kind(parts[0], normalize=normalize_kind, line=text)
        amount = self._parse_amount(parts[2], line=text)
        on_date = self._parse_date(parts[3], line=text)

        description = DELIMITER.join(parts[4:]).replace(SENTINEL, DELIMITER)

        try:
            return Transaction(
                kind=kind,
                category=parts[1],
                amount=amount,
                date=on_date,
                description=description,
            )
        except ValidationError as e:
            raise DecodeError(
                DecodeErrorReason.MALFORMED_ROW,
                f"Row does not form a valid transaction: {e}",
                line=text,
            ) from e

    def _parse_kind(self, raw: str, normalize: bool, line: str) -> TransactionKind:
        value = raw.upper() if normalize else raw
        try:
            return TransactionKind(value)
        except ValueError:
            raise DecodeError(
                DecodeErrorReason.BAD_KIND,
                f"Invalid transaction type: {raw!r}",
                line=line,
            ) from None

    def _parse_amount(self, raw: str, line: str) -> Decimal:
        value = raw.strip()
        if not AMOUNT_PATTERN.match(value):
            raise DecodeError(
                DecodeErrorReason.BAD_AMOUNT,
                f"Invalid amount: {raw!r}",
                line=line,
            )
        return Decimal(value)

    def _parse_date(self, raw: str, line: str) -> date:
        value = raw.strip()
        if not DATE_PATTERN.match(value):
            raise DecodeError(
                DecodeErrorReason.BAD_DATE,
                f"Date must look like YYYY-MM-DD: {raw!r}",
                line=line,
            )
        try:
            return datetime.strptime(value, DATE_FORMAT).date()
        except ValueError:
            raise DecodeError(
                DecodeErrorReason.BAD_DATE,
                f"Not a calendar date: {raw!r}",
                line=line,
            ) from None


_default_codec = RowCodec()


def encode(transaction: Transaction) -> str:
    """Encode with the shared default codec."""
    return _default_codec.encode(transaction)


def decode(line: str, *, normalize_kind: bool = False) -> Transaction:
    """Decode with the shared default codec."""
    return _default_codec.decode(line, normalize_kind=normalize_kind)
