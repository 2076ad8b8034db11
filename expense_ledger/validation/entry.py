"""
Interactive Entry Rules

Parsing rules for values typed at the prompt when a user adds a
transaction by hand. These differ from the file formats on purpose:

- AMOUNT: an invalid amount is an error; the prompt asks again
- DATE: empty means today; an invalid date also falls back to today,
  and the caller is told so it can print a notice. Only zero-padded
  YYYY-MM-DD is valid
- DESCRIPTION: free text on one line
- CATEGORY: chosen by number from the fixed list for the kind

Nothing here touches the ledger; the CLI owns the prompting.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from expense_ledger.codec import AMOUNT_PATTERN, DATE_FORMAT, DATE_PATTERN, DecodeError
from expense_ledger.models.transaction import (
    DecodeErrorReason,
    TransactionKind,
    categories_for,
)


def parse_kind(text: str) -> TransactionKind:
    """'income' / 'EXPENSE' -> TransactionKind."""
    try:
        return TransactionKind(text.strip().upper())
    except ValueError:
        raise DecodeError(
            DecodeErrorReason.BAD_KIND,
            f"Transaction type must be income or expense, got {text!r}",
        ) from None


def parse_amount(text: str) -> Decimal:
    """
    Parse a typed amount.

    Raises:
        DecodeError: BAD_AMOUNT unless the text is a plain decimal number
            such as 12, -3.5 or .75.
    """
    value = text.strip()
    if not AMOUNT_PATTERN.match(value):
        raise DecodeError(
            DecodeErrorReason.BAD_AMOUNT,
            f"Please enter a valid amount (got {text!r})",
        )
    return Decimal(value)


def check_description(text: str) -> str:
    """
    Descriptions are stored on a single line.

    Raises:
        ValueError: If the text contains a line break.
    """
    if "\n" in text or "\r" in text:
        raise ValueError("Description must not contain line breaks")
    return text


def resolve_entry_date(
    text: Optional[str],
    today: Optional[date] = None,
) -> tuple[date, bool]:
    """
    Turn a typed date into a date.

    Returns:
        (resolved_date, fell_back). fell_back is True only when the user
        typed something that was not a valid YYYY-MM-DD date.
    """
    today = today or date.today()
    value = (text or "").strip()
    if not value:
        return today, False
    if not DATE_PATTERN.match(value):
        return today, True

    try:
        return datetime.strptime(value, DATE_FORMAT).date(), False
    except ValueError:
        return today, True


def category_choices(kind: TransactionKind) -> list[tuple[int, str]]:
    """Numbered category menu, starting at 1."""
    return list(enumerate(categories_for(kind), start=1))


def pick_category(kind: TransactionKind, choice: int) -> str:
    """
    Category for a 1-based menu choice.

    Raises:
        ValueError: If the choice is outside the menu.
    """
    categories = categories_for(kind)
    if not 1 <= choice <= len(categories):
        raise ValueError(f"Please enter a valid choice (1-{len(categories)})")
    return categories[choice - 1]
