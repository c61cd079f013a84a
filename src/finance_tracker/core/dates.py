from __future__ import annotations

import re
from datetime import date, datetime

# YYYY-MM-DD, also tolerating non-padded month/day (2023-1-5)
_DATE_RE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")


def parse_calendar_date(value: str | date) -> date:
    """
    Parse a calendar date from a date object or an ISO-like string.

    datetime values are truncated to their date. Raises ValueError for
    anything that is not a real calendar day.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"expected a date string, got {type(value).__name__}")

    s = value.strip()
    m = _DATE_RE.match(s)
    if not m:
        raise ValueError(f"invalid date: {value!r}")

    year, month, day = (int(x) for x in m.groups())
    return date(year, month, day)