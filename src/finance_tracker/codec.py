from __future__ import annotations

import json
from typing import Any, Iterable

from .errors import ParseError, ValidationError
from .ledger.models import Transaction, TransactionFields, build_fields, build_transaction

IMPORT_FIELDS = ("date", "type", "category", "amount")


def export_json(snapshot: Iterable[Transaction], indent: int | None = 2) -> str:
    """
    Lossless export: every record with its id, in store order.
    """
    return json.dumps([tx.to_json_dict() for tx in snapshot], ensure_ascii=False, indent=indent)


def load_json(text: str) -> list[Transaction]:
    """
    Inverse of export_json. Ids are kept, so the result is meant for
    TransactionStore.replace_all.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"not valid JSON: {e.msg} at line {e.lineno} column {e.colno}") from e

    if not isinstance(data, list):
        raise ParseError("expected a JSON array of transactions")

    out: list[Transaction] = []
    for i, obj in enumerate(data):
        if not isinstance(obj, dict):
            raise ParseError(f"record {i}: expected an object, got {type(obj).__name__}")
        if "id" not in obj:
            raise ParseError(f"record {i}: missing id")
        try:
            out.append(build_transaction(obj))
        except ValidationError as e:
            raise ParseError(f"record {i}: {e}") from e
    return out


def parse_import_line(line: str, line_no: int) -> TransactionFields:
    parts = [p.strip() for p in line.split(",")]
    if len(parts) != len(IMPORT_FIELDS):
        raise ParseError(
            f"expected {len(IMPORT_FIELDS)} fields ({','.join(IMPORT_FIELDS)}), got {len(parts)}",
            line_no=line_no,
            line=line,
        )

    raw: dict[str, Any] = dict(zip(IMPORT_FIELDS, parts))
    for name in ("date", "amount"):
        if not raw[name]:
            raise ParseError(f"{name} is empty", line_no=line_no, line=line)

    try:
        return build_fields(raw)
    except ValidationError as e:
        raise ParseError(str(e), line_no=line_no, line=line) from e


def parse_import(text: str) -> list[TransactionFields]:
    """
    Parse pasted CSV: one `date,type,category,amount` record per line, no
    header, no quoting. Blank lines are skipped. Records carry no id; the
    store mints one per record when they are appended.
    """
    out: list[TransactionFields] = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        out.append(parse_import_line(line, line_no))
    return out


def export_csv(snapshot: Iterable[Transaction]) -> str:
    """
    Write records in the import format. Ids are not part of it.
    """
    lines: list[str] = []
    for tx in snapshot:
        if any(c in tx.category for c in ",\r\n"):
            raise ValidationError(f"transaction {tx.id}: category {tx.category!r} cannot be written as CSV")
        lines.append(f"{tx.date.isoformat()},{tx.type},{tx.category},{tx.amount!r}")
    return "\n".join(lines) + ("\n" if lines else "")
