from __future__ import annotations

import datetime as dt
from typing import Any, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..core.dates import parse_calendar_date
from ..errors import ValidationError

TransactionType = Literal["Income", "Expense"]

TRANSACTION_TYPES: tuple[str, ...] = ("Income", "Expense")

# Suggestion list for forms; stored categories are open strings.
DEFAULT_CATEGORIES: tuple[str, ...] = ("Salary", "Groceries", "Bills", "Entertainment", "Other")


class TransactionFields(BaseModel):
    """
    Everything a transaction carries except its id.

    Consumed by add/update and produced by the CSV importer. type and
    category default to the form defaults (Income / Salary); date and amount
    are required.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    date: dt.date
    type: TransactionType = "Income"
    category: str = "Salary"
    amount: float = Field(allow_inf_nan=False)

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, v: Any) -> dt.date:
        return parse_calendar_date(v)

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().capitalize()
        return v

    @field_validator("category", mode="before")
    @classmethod
    def _strip_category(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("category must not be empty")
        return v

    @field_validator("amount", mode="before")
    @classmethod
    def _parse_amount(cls, v: Any) -> Any:
        # bool is an int subclass; True is not an amount
        if isinstance(v, bool):
            raise ValueError("amount must be a number")
        if isinstance(v, str):
            s = v.strip()
            if not s:
                raise ValueError("amount is required")
            return float(s)
        return v

    def with_id(self, tx_id: int) -> Transaction:
        return Transaction(id=tx_id, **self.model_dump())


class Transaction(TransactionFields):
    id: int

    def to_fields(self) -> TransactionFields:
        return TransactionFields(**self.model_dump(exclude={"id"}))

    def to_json_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "type": self.type,
            "category": self.category,
            "amount": self.amount,
        }


def _describe(err: PydanticValidationError) -> str:
    parts = []
    for e in err.errors():
        loc = ".".join(str(x) for x in e.get("loc", ())) or "record"
        parts.append(f"{loc}: {e.get('msg', 'invalid')}")
    return "; ".join(parts)


def build_fields(data: TransactionFields | Mapping[str, Any]) -> TransactionFields:
    """
    Validate user-supplied fields. Any id present is dropped: ids belong to the store.
    """
    if isinstance(data, TransactionFields):
        data = data.model_dump(exclude={"id"})
    try:
        return TransactionFields.model_validate(dict(data))
    except PydanticValidationError as e:
        raise ValidationError(_describe(e)) from e


def build_transaction(data: Mapping[str, Any]) -> Transaction:
    try:
        return Transaction.model_validate(dict(data))
    except PydanticValidationError as e:
        raise ValidationError(_describe(e)) from e


def sample_transactions() -> list[Transaction]:
    return [
        Transaction(id=1, date=dt.date(2023, 1, 1), type="Income", category="Salary", amount=5000),
        Transaction(id=2, date=dt.date(2023, 1, 5), type="Expense", category="Groceries", amount=-150),
        Transaction(id=3, date=dt.date(2023, 1, 10), type="Expense", category="Bills", amount=-300),
    ]
