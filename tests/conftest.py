"""
Shared fixtures.

Tests never touch the real working directory: each test runs inside its
own tmp_path, with ledger-related environment variables cleared and the
settings cache reset.
"""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from expense_ledger.audit import AuditLogger
from expense_ledger.config import get_settings
from expense_ledger.ledger import Ledger
from expense_ledger.models.transaction import Transaction, TransactionKind
from expense_ledger.services.storage import (
    FlatFileTransactionStorage,
    StorageWriteError,
    TransactionStorageInterface,
)


_ENV_VARS = [
    "LEDGER_DATA_FILE",
    "LEDGER_FILE_ENCODING",
    "LEDGER_ON_LOAD_ERROR",
    "LEDGER_CURRENCY_SYMBOL",
    "APP_ENVIRONMENT",
    "DEBUG_MODE",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def _isolate_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Run each test in an empty directory with default settings."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class InMemoryStorage(TransactionStorageInterface):
    """Storage double that records every save."""

    def __init__(self, initial: Iterable[Transaction] = (), fail_writes: bool = False):
        self.stored: list[Transaction] = list(initial)
        self.save_count = 0
        self.fail_writes = fail_writes

    @property
    def location(self) -> str:
        return "memory://ledger"

    def exists(self) -> bool:
        return self.save_count > 0 or bool(self.stored)

    def load(self) -> list[Transaction]:
        return list(self.stored)

    def save(self, transactions: Iterable[Transaction]) -> None:
        if self.fail_writes:
            raise StorageWriteError("disk full")
        self.stored = list(transactions)
        self.save_count += 1


def make_tx(
    kind: TransactionKind = TransactionKind.EXPENSE,
    category: str = "Food",
    amount: str = "10.00",
    on_date: date = date(2024, 3, 15),
    description: str = "",
) -> Transaction:
    return Transaction(
        kind=kind,
        category=category,
        amount=Decimal(amount),
        date=on_date,
        description=description,
    )


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    return tmp_path / "data" / "expense_data.csv"


@pytest.fixture
def audit_logger() -> AuditLogger:
    return AuditLogger()


@pytest.fixture
def memory_storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def file_storage(data_file: Path, audit_logger: AuditLogger) -> FlatFileTransactionStorage:
    return FlatFileTransactionStorage(data_file, audit_logger=audit_logger)


@pytest.fixture
def ledger(memory_storage: InMemoryStorage, audit_logger: AuditLogger) -> Ledger:
    return Ledger(memory_storage, audit_logger=audit_logger)
