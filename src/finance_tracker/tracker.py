from __future__ import annotations

import logging
from typing import Any, Mapping

from .analytics.filters import FilterSpec, apply_filter
from .analytics.summary import Summary, summarize
from .codec import export_csv, export_json, load_json, parse_import
from .errors import LedgerError
from .ledger.models import Transaction, TransactionFields
from .ledger.store import Snapshot, TransactionStore

logger = logging.getLogger(__name__)


class FinanceTracker:
    """
    Entry point for a presentation layer: one method per user action.

    Filter and summary are recomputed from the current snapshot on every call;
    summary always covers the whole store, never the filtered view.
    """

    def __init__(self, store: TransactionStore | None = None, export_indent: int | None = 2):
        self.store = store if store is not None else TransactionStore()
        self.export_indent = export_indent

    @property
    def transactions(self) -> Snapshot:
        return self.store.snapshot()

    def get(self, tx_id: int) -> Transaction:
        try:
            return self.store.get(tx_id)
        except LedgerError as e:
            logger.warning("Lookup of %s rejected: %s", tx_id, e)
            raise

    def add(self, fields: TransactionFields | Mapping[str, Any]) -> Transaction:
        try:
            tx = self.store.add(fields)
        except LedgerError as e:
            logger.warning("Add rejected: %s", e)
            raise
        logger.info("Transaction added: id=%s date=%s type=%s amount=%s", tx.id, tx.date, tx.type, tx.amount)
        return tx

    def update(self, tx_id: int, fields: TransactionFields | Mapping[str, Any]) -> Transaction:
        try:
            tx = self.store.update(tx_id, fields)
        except LedgerError as e:
            logger.warning("Update of %s rejected: %s", tx_id, e)
            raise
        logger.info("Transaction updated: id=%s", tx.id)
        return tx

    def remove(self, tx_id: int) -> None:
        try:
            self.store.remove(tx_id)
        except LedgerError as e:
            logger.warning("Delete of %s rejected: %s", tx_id, e)
            raise
        logger.info("Transaction deleted: id=%s", tx_id)

    def filtered(self, spec: FilterSpec | Mapping[str, Any] | None = None) -> tuple[Transaction, ...]:
        return apply_filter(self.store.snapshot(), spec)

    def summary(self) -> Summary:
        return summarize(self.store.snapshot())

    def export_json(self) -> str:
        snap = self.store.snapshot()
        logger.info("Exporting %d transactions as JSON", len(snap))
        return export_json(snap, indent=self.export_indent)

    def export_csv(self) -> str:
        snap = self.store.snapshot()
        logger.info("Exporting %d transactions as CSV", len(snap))
        return export_csv(snap)

    def import_text(self, text: str) -> list[Transaction]:
        """Parse pasted CSV and append every record with a fresh id."""
        try:
            added = self.store.append_all(parse_import(text))
        except LedgerError as e:
            logger.warning("Import rejected: %s", e)
            raise
        logger.info("Imported %d transactions", len(added))
        return added

    def restore(self, text: str) -> None:
        """Replace the whole store with a JSON export, keeping its ids."""
        try:
            self.store.replace_all(load_json(text))
        except LedgerError as e:
            logger.warning("Restore rejected: %s", e)
            raise
        logger.info("Restored %d transactions", len(self.store))
