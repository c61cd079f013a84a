from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from . import __version__
from .config import load_settings
from .errors import LedgerError
from .ledger.models import DEFAULT_CATEGORIES, Transaction, sample_transactions
from .logging_setup import setup_logging
from .tracker import FinanceTracker

MUTATING_COMMANDS = {"add", "update", "delete", "import"}


def fmt_amount(value: float) -> str:
    return f"{value:.2f}"


def format_row(tx: Transaction) -> str:
    return f"{tx.id:>6}  {tx.date.isoformat()}  {tx.type:<7}  {tx.category:<14}  {fmt_amount(tx.amount):>12}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="finance-tracker")
    parser.add_argument("--version", action="store_true", help="Print version and exit")
    parser.add_argument(
        "--ledger",
        type=Path,
        default=None,
        help="JSON export to load on start and rewrite after changes (default: LEDGER_FILE)",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="health",
        choices=["health", "list", "summary", "add", "update", "delete", "import", "export"],
        help="Command to run",
    )

    parser.add_argument("--id", type=int, default=None, help="Transaction id (update / delete)")
    parser.add_argument("--date", default=None, help="YYYY-MM-DD (add / update)")
    parser.add_argument(
        "--type", dest="tx_type", default=None, help="Income or Expense (add / update field, list filter)"
    )
    parser.add_argument(
        "--category",
        default=None,
        help=f"Category (add / update / list filter). Suggested: {', '.join(DEFAULT_CATEGORIES)}",
    )
    parser.add_argument("--amount", default=None, help="Signed amount (add / update)")

    parser.add_argument("--date-from", default=None, help="Inclusive lower date bound (list)")
    parser.add_argument("--date-to", default=None, help="Inclusive upper date bound (list)")

    parser.add_argument("--file", type=Path, default=None, help="CSV file to import; stdin when omitted")
    parser.add_argument("--format", choices=["json", "csv"], default="json", help="Export format")
    parser.add_argument("--output", type=Path, default=None, help="Export destination; stdout when omitted")
    return parser


def _load_tracker(ledger: Path | None, seed_sample_data: bool, export_indent: int) -> FinanceTracker:
    tracker = FinanceTracker(export_indent=export_indent)
    if ledger is not None and ledger.exists():
        tracker.restore(ledger.read_text(encoding="utf-8"))
    elif seed_sample_data:
        tracker.store.replace_all(sample_transactions())
    return tracker


def _save_ledger(tracker: FinanceTracker, ledger: Path) -> None:
    ledger.parent.mkdir(parents=True, exist_ok=True)
    tmp = ledger.with_suffix(ledger.suffix + ".tmp")
    tmp.write_text(tracker.export_json(), encoding="utf-8")
    tmp.replace(ledger)


def _run(args: argparse.Namespace, tracker: FinanceTracker) -> int:
    if args.command == "list":
        rows = tracker.filtered(
            {
                "type": args.tx_type,
                "category": args.category,
                "date_from": args.date_from,
                "date_to": args.date_to,
            }
        )
        for tx in rows:
            print(format_row(tx))
        print(f"transactions = {len(rows)}")
        return 0

    if args.command == "summary":
        s = tracker.summary()
        print("income =", fmt_amount(s.income))
        print("expenses =", fmt_amount(s.expenses))
        print("balance =", fmt_amount(s.balance))
        for cat, amount in s.categories.items():
            print(f"category {cat} = {fmt_amount(amount)}")
        return 0

    if args.command == "add":
        fields = {"date": args.date, "amount": args.amount}
        if args.tx_type is not None:
            fields["type"] = args.tx_type
        if args.category is not None:
            fields["category"] = args.category
        tx = tracker.add(fields)
        print("added:", format_row(tx))
        return 0

    if args.command == "update":
        if args.id is None:
            print("error: update needs --id", file=sys.stderr)
            return 2
        # start from the stored record, like an edit form pre-filled with it
        current = tracker.get(args.id)
        fields = current.to_fields().model_dump()
        for key, value in (
            ("date", args.date),
            ("type", args.tx_type),
            ("category", args.category),
            ("amount", args.amount),
        ):
            if value is not None:
                fields[key] = value
        tx = tracker.update(args.id, fields)
        print("updated:", format_row(tx))
        return 0

    if args.command == "delete":
        if args.id is None:
            print("error: delete needs --id", file=sys.stderr)
            return 2
        tracker.remove(args.id)
        print("deleted:", args.id)
        return 0

    if args.command == "import":
        text = args.file.read_text(encoding="utf-8") if args.file is not None else sys.stdin.read()
        added = tracker.import_text(text)
        print("imported =", len(added))
        return 0

    if args.command == "export":
        blob = tracker.export_json() if args.format == "json" else tracker.export_csv()
        if args.output is not None:
            args.output.write_text(blob, encoding="utf-8")
            print("exported =", len(tracker.transactions), "->", args.output)
        else:
            sys.stdout.write(blob if blob.endswith("\n") else blob + "\n")
        return 0

    return 1


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return 0

    settings = load_settings()
    setup_logging(settings.log_level)

    logger = logging.getLogger(__name__)

    if args.command == "health":
        logger.info("Application started successfully.")
        print("ok")
        return 0

    ledger = args.ledger if args.ledger is not None else settings.ledger_file

    try:
        tracker = _load_tracker(ledger, settings.seed_sample_data, settings.export_indent)
        code = _run(args, tracker)
        if code == 0 and args.command in MUTATING_COMMANDS and ledger is not None:
            _save_ledger(tracker, ledger)
            logger.info("Ledger saved to %s", ledger)
    except (LedgerError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    return code


if __name__ == "__main__":
    raise SystemExit(main())
