"""Row codec package."""

from expense_ledger.codec.row_codec import (
    AMOUNT_PATTERN,
    DATE_FORMAT,
    DATE_PATTERN,
    DELIMITER,
    HEADER,
    SENTINEL,
    DecodeError,
    RowCodec,
    decode,
    encode,
)

__all__ = [
    "AMOUNT_PATTERN",
    "DATE_FORMAT",
    "DATE_PATTERN",
    "DELIMITER",
    "HEADER",
    "SENTINEL",
    "DecodeError",
    "RowCodec",
    "decode",
    "encode",
]
