from __future__ import annotations

import datetime as dt
from typing import Any, Iterable, Mapping, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..core.dates import parse_calendar_date
from ..errors import ValidationError
from ..ledger.models import Transaction, TransactionType


class FilterSpec(BaseModel):
    """
    Optional predicates narrowing a snapshot. Empty strings count as unset,
    which is what an untouched form field sends.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: Optional[TransactionType] = None
    category: Optional[str] = None
    date_from: Optional[dt.date] = None
    date_to: Optional[dt.date] = None

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().capitalize() or None
        return v

    @field_validator("category", mode="before")
    @classmethod
    def _blank_category(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("date_from", "date_to", mode="before")
    @classmethod
    def _parse_dates(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return parse_calendar_date(v)

    def is_empty(self) -> bool:
        return self.type is None and self.category is None and self.date_from is None and self.date_to is None

    def matches(self, tx: Transaction) -> bool:
        if self.type is not None and tx.type != self.type:
            return False
        if self.category is not None and tx.category != self.category:
            return False
        if self.date_from is not None and tx.date < self.date_from:
            return False
        if self.date_to is not None and tx.date > self.date_to:
            return False
        return True


# camelCase keys as a browser form sends them
_KEY_ALIASES = {"dateFrom": "date_from", "dateTo": "date_to"}


def build_filter(data: FilterSpec | Mapping[str, Any] | None) -> FilterSpec:
    if data is None:
        return FilterSpec()
    if isinstance(data, FilterSpec):
        return data
    normalized = {_KEY_ALIASES.get(k, k): v for k, v in data.items()}
    try:
        return FilterSpec.model_validate(normalized)
    except PydanticValidationError as e:
        first = e.errors()[0]
        loc = ".".join(str(x) for x in first.get("loc", ())) or "filter"
        raise ValidationError(f"invalid filter {loc}: {first.get('msg', 'invalid')}") from e


def apply_filter(
    snapshot: Iterable[Transaction],
    spec: FilterSpec | Mapping[str, Any] | None = None,
) -> tuple[Transaction, ...]:
    """
    Stable filter: output keeps the snapshot's order.
    """
    rows = tuple(snapshot)
    f = build_filter(spec)
    if f.is_empty():
        return rows
    return tuple(tx for tx in rows if f.matches(tx))
