from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator, Mapping

from ..errors import NotFoundError, ValidationError
from .models import Transaction, TransactionFields, build_fields

Snapshot = tuple[Transaction, ...]
Listener = Callable[[Snapshot], None]


class TransactionStore:
    """
    In-memory, insertion-ordered transaction ledger.

    Ids come from a monotonic counter and are never handed out twice by the
    same store, even after the record holding them is removed. Every mutation
    builds the new contents first and swaps them in only when nothing failed,
    so an exception always leaves the store as it was.

    Listeners registered with subscribe() get the new snapshot after each
    successful mutation.
    """

    def __init__(self, records: Iterable[Transaction] | None = None):
        self._rows: list[Transaction] = []
        self._next_id = 1
        self._listeners: list[Listener] = []
        if records is not None:
            self.replace_all(records)

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self.snapshot())

    def __contains__(self, tx_id: object) -> bool:
        return any(r.id == tx_id for r in self._rows)

    def snapshot(self) -> Snapshot:
        return tuple(self._rows)

    def get(self, tx_id: int) -> Transaction:
        return self._rows[self._index_of(tx_id)]

    def _index_of(self, tx_id: int) -> int:
        for i, r in enumerate(self._rows):
            if r.id == tx_id:
                return i
        raise NotFoundError(tx_id)

    def _mint_id(self) -> int:
        tx_id = self._next_id
        self._next_id += 1
        return tx_id

    def _commit(self, rows: list[Transaction]) -> None:
        self._rows = rows
        snap = self.snapshot()
        for listener in list(self._listeners):
            listener(snap)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def add(self, fields: TransactionFields | Mapping[str, Any]) -> Transaction:
        tx = build_fields(fields).with_id(self._mint_id())
        self._commit([*self._rows, tx])
        return tx

    def update(self, tx_id: int, fields: TransactionFields | Mapping[str, Any]) -> Transaction:
        idx = self._index_of(tx_id)
        tx = build_fields(fields).with_id(tx_id)
        rows = list(self._rows)
        rows[idx] = tx
        self._commit(rows)
        return tx

    def remove(self, tx_id: int) -> None:
        """Raises NotFoundError for an unknown id rather than silently doing nothing."""
        idx = self._index_of(tx_id)
        rows = list(self._rows)
        del rows[idx]
        self._commit(rows)

    def append_all(self, items: Iterable[TransactionFields | Mapping[str, Any]]) -> list[Transaction]:
        # validate everything before minting a single id
        validated = [build_fields(it) for it in items]
        added = [f.with_id(self._mint_id()) for f in validated]
        if added:
            self._commit([*self._rows, *added])
        return added

    def replace_all(self, records: Iterable[Transaction]) -> None:
        rows = list(records)
        seen: set[int] = set()
        for r in rows:
            if not isinstance(r, Transaction):
                raise ValidationError(f"expected Transaction, got {type(r).__name__}")
            if r.id in seen:
                raise ValidationError(f"duplicate transaction id {r.id}")
            seen.add(r.id)

        max_id = max(seen, default=0)
        self._next_id = max(self._next_id, max_id + 1)
        self._commit(rows)
