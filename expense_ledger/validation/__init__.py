"""Entry validation package."""

from expense_ledger.validation.entry import (
    category_choices,
    check_description,
    parse_amount,
    parse_kind,
    pick_category,
    resolve_entry_date,
)

__all__ = [
    "category_choices",
    "check_description",
    "parse_amount",
    "parse_kind",
    "pick_category",
    "resolve_entry_date",
]
