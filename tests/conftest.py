from __future__ import annotations

import logging

import pytest

from finance_tracker.config import load_settings
from finance_tracker.ledger.models import sample_transactions
from finance_tracker.ledger.store import TransactionStore


@pytest.fixture
def store() -> TransactionStore:
    s = TransactionStore()
    s.append_all(
        [
            {"date": "2023-01-01", "type": "Income", "category": "Salary", "amount": 5000},
            {"date": "2023-01-05", "type": "Expense", "category": "Groceries", "amount": -150},
            {"date": "2023-01-10", "type": "Expense", "category": "Bills", "amount": -300},
        ]
    )
    return s


@pytest.fixture
def sample_store() -> TransactionStore:
    return TransactionStore(sample_transactions())


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch):
    for name in ("LOG_LEVEL", "LEDGER_FILE", "SEED_SAMPLE_DATA", "EXPORT_INDENT"):
        monkeypatch.delenv(name, raising=False)
    load_settings.cache_clear()
    yield
    load_settings.cache_clear()
    pkg_logger = logging.getLogger("finance_tracker")
    for h in list(pkg_logger.handlers):
        if h.get_name() == "finance_tracker.stderr":
            pkg_logger.removeHandler(h)
