from __future__ import annotations


class LedgerError(Exception):
    """Base class for recoverable ledger failures. The store is never left half-mutated."""


class ValidationError(LedgerError):
    """A transaction is missing a required field or carries an invalid value."""


class NotFoundError(LedgerError):
    def __init__(self, tx_id: int):
        super().__init__(f"transaction {tx_id} not found")
        self.tx_id = tx_id


class ParseError(LedgerError):
    """
    Import or restore text could not be parsed.

    line_no is 1-based; it is None when the failure is not tied to one line
    (e.g. a JSON export that is not valid JSON).
    """

    def __init__(self, message: str, line_no: int | None = None, line: str | None = None):
        if line_no is not None:
            message = f"line {line_no}: {message} ({line!r})"
        super().__init__(message)
        self.line_no = line_no
        self.line = line
