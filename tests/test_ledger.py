"""Tests for the in-memory ledger and its persistence rules."""

import pytest
from datetime import date

from expense_ledger.config import LoadErrorPolicy
from expense_ledger.ledger import Ledger
from expense_ledger.models.audit import AuditEventType
from expense_ledger.services.storage import (
    FlatFileTransactionStorage,
    LedgerLoadError,
    StorageWriteError,
)

from conftest import InMemoryStorage, make_tx


class TestAppend:
    """append() keeps order and saves immediately."""

    def test_append_saves_whole_ledger(self, ledger, memory_storage):
        first = make_tx(category="Food")
        second = make_tx(category="Rent")

        ledger.append(first)
        ledger.append(second)

        assert memory_storage.save_count == 2
        assert memory_storage.stored == [first, second]

    def test_insertion_order_not_date_order(self, ledger):
        later = make_tx(on_date=date(2024, 12, 31))
        earlier = make_tx(on_date=date(2024, 1, 1))
        ledger.append(later)
        ledger.append(earlier)
        assert ledger.all() == (later, earlier)

    def test_snapshot_is_read_only(self, ledger):
        ledger.append(make_tx())
        snapshot = ledger.all()
        assert isinstance(snapshot, tuple)
        assert len(ledger) == 1

    def test_failed_save_keeps_transaction_in_memory(self, audit_logger):
        storage = InMemoryStorage(fail_writes=True)
        ledger = Ledger(storage, audit_logger=audit_logger)
        tx = make_tx()

        with pytest.raises(StorageWriteError):
            ledger.append(tx)

        assert ledger.all() == (tx,)
        assert audit_logger.recent_events(1)[0].event_type == AuditEventType.SAVE_FAILED

        storage.fail_writes = False
        ledger.save_all()
        assert storage.stored == [tx]

    def test_append_logs_save(self, ledger, audit_logger):
        ledger.append(make_tx())
        event = audit_logger.recent_events(1)[0]
        assert event.event_type == AuditEventType.LEDGER_SAVED
        assert event.details["transaction_count"] == 1


class TestExtend:
    """extend() only changes memory."""

    def test_extend_does_not_save(self, ledger, memory_storage):
        added = ledger.extend([make_tx(), make_tx()])
        assert added == 2
        assert len(ledger) == 2
        assert memory_storage.save_count == 0

    def test_extend_accepts_generator(self, ledger):
        assert ledger.extend(make_tx() for _ in range(3)) == 3


class TestLoadAll:
    """load_all() appends stored rows."""

    def test_load_appends_in_storage_order(self, audit_logger):
        stored = [make_tx(category="Rent"), make_tx(category="Food")]
        ledger = Ledger(InMemoryStorage(stored), audit_logger=audit_logger)

        loaded = ledger.load_all()

        assert loaded == stored
        assert list(ledger) == stored
        event = audit_logger.recent_events(1)[0]
        assert event.event_type == AuditEventType.LEDGER_LOADED
        assert event.details["transaction_count"] == 2
        assert event.details["skipped_count"] == 0

    def test_load_reports_rows_skipped_by_storage(self, data_file, audit_logger):
        data_file.parent.mkdir(parents=True, exist_ok=True)
        data_file.write_text(
            "TYPE,CATEGORY,AMOUNT,DATE,DESCRIPTION\ngarbage\nINCOME,Gift,5,2024-01-01,\n",
            encoding="utf-8",
        )
        storage = FlatFileTransactionStorage(data_file, on_load_error=LoadErrorPolicy.SKIP)
        ledger = Ledger(storage, audit_logger=audit_logger)

        ledger.load_all()

        event = audit_logger.recent_events(1)[0]
        assert event.event_type == AuditEventType.LEDGER_LOADED
        assert event.details["transaction_count"] == 1
        assert event.details["skipped_count"] == 1

    def test_load_after_append_keeps_existing(self):
        ledger = Ledger(InMemoryStorage([make_tx(category="Rent")]))
        ledger.extend([make_tx(category="Food")])
        ledger.load_all()
        assert [tx.category for tx in ledger] == ["Food", "Rent"]

    def test_failed_load_leaves_memory_unchanged(self, data_file, audit_logger):
        data_file.parent.mkdir(parents=True)
        data_file.write_text(
            "TYPE,CATEGORY,AMOUNT,DATE,DESCRIPTION\n"
            "INCOME,Salary,100,2024-01-01,\n"
            "INCOME,Salary,bad,2024-01-02,\n",
            encoding="utf-8",
        )
        ledger = Ledger(FlatFileTransactionStorage(data_file), audit_logger=audit_logger)

        with pytest.raises(LedgerLoadError):
            ledger.load_all()

        assert len(ledger) == 0
        assert audit_logger.recent_events(1)[0].event_type == AuditEventType.LEDGER_LOAD_FAILED

    def test_missing_file_loads_nothing(self, data_file):
        ledger = Ledger(FlatFileTransactionStorage(data_file))
        assert ledger.load_all() == []
        assert len(ledger) == 0


class TestPersistence:
    """Round trips through the real file."""

    def test_reload_in_fresh_ledger(self, data_file):
        txs = [
            make_tx(description="coffee, cake"),
            make_tx(category="Travel", amount="45.10", on_date=date(2024, 4, 2)),
        ]
        first = Ledger(FlatFileTransactionStorage(data_file))
        for tx in txs:
            first.append(tx)

        second = Ledger(FlatFileTransactionStorage(data_file))
        second.load_all()
        assert second.all() == tuple(txs)

    def test_save_all_without_changes_is_idempotent(self, data_file):
        ledger = Ledger(FlatFileTransactionStorage(data_file))
        ledger.append(make_tx())
        before = data_file.read_bytes()
        ledger.save_all()
        assert data_file.read_bytes() == before


class TestBetween:
    """Date range filtering."""

    def test_bounds_are_inclusive(self, ledger):
        ledger.extend([
            make_tx(on_date=date(2024, 2, 29)),
            make_tx(on_date=date(2024, 3, 1)),
            make_tx(on_date=date(2024, 3, 31)),
            make_tx(on_date=date(2024, 4, 1)),
        ])
        result = ledger.between(date(2024, 3, 1), date(2024, 3, 31))
        assert [tx.date for tx in result] == [date(2024, 3, 1), date(2024, 3, 31)]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
