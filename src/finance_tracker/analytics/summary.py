from __future__ import annotations

import math
import types
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from ..ledger.models import Transaction


@dataclass(frozen=True)
class Summary:
    income: float
    expenses: float
    # read-only view; to_dict() returns a mutable copy
    categories: Mapping[str, float] = field(default_factory=lambda: types.MappingProxyType({}))

    def __post_init__(self) -> None:
        if not isinstance(self.categories, types.MappingProxyType):
            object.__setattr__(self, "categories", types.MappingProxyType(dict(self.categories)))

    @property
    def balance(self) -> float:
        return math.fsum((self.income, self.expenses))

    def to_dict(self) -> dict[str, Any]:
        return {
            "income": self.income,
            "expenses": self.expenses,
            "balance": self.balance,
            "categories": dict(self.categories),
        }


def summarize(snapshot: Iterable[Transaction]) -> Summary:
    """
    Income/expense totals and per-category expense totals over the whole store.

    Amounts keep their stored sign. Anything that is not Income counts as an
    expense. Sums go through math.fsum, which is exact, so the result does
    not depend on the order of the records.
    """
    income: list[float] = []
    expenses: list[float] = []
    by_category: dict[str, list[float]] = defaultdict(list)

    for tx in snapshot:
        if tx.type == "Income":
            income.append(tx.amount)
        else:
            expenses.append(tx.amount)
            by_category[tx.category].append(tx.amount)

    return Summary(
        income=math.fsum(income),
        expenses=math.fsum(expenses),
        categories={k: math.fsum(v) for k, v in sorted(by_category.items())},
    )
