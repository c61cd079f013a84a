from .models import (
    DEFAULT_CATEGORIES,
    TRANSACTION_TYPES,
    Transaction,
    TransactionFields,
    TransactionType,
    build_fields,
    build_transaction,
    sample_transactions,
)
from .store import Snapshot, TransactionStore

__all__ = [
    "Transaction",
    "TransactionFields",
    "TransactionType",
    "TransactionStore",
    "Snapshot",
    "TRANSACTION_TYPES",
    "DEFAULT_CATEGORIES",
    "build_fields",
    "build_transaction",
    "sample_transactions",
]
