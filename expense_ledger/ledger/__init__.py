"""Ledger package."""

from expense_ledger.ledger.ledger import Ledger

__all__ = ["Ledger"]
