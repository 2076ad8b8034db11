"""Transaction import package."""

from expense_ledger.importing.importer import ImportFileNotFoundError, TransactionImporter

__all__ = ["ImportFileNotFoundError", "TransactionImporter"]
