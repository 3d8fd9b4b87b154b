"""
Due-date parsing for the three-box (day / month / year) date input.

The browser copy in ``static/js/task-validation.js`` applies the same checks
in the same order and must reject the same inputs with the same message.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timezone

from .models import FieldError

MIN_YEAR = 2020

DUE_DATE_ANCHOR = "#due-date-day"

INCOMPLETE_DATE = "Please enter a complete due date or leave all fields blank"
INVALID_DATE = "Please enter a valid due date"
PAST_DATE = "Due date must be in the future"

# No valid day, month or year is longer than four digits.
_DIGITS = re.compile(r"[0-9]{1,4}")

# Trimmed on both layers; the browser copy strips exactly these characters.
WHITESPACE = " \t\n\r\f\v"


@dataclass(frozen=True, slots=True)
class DatePartsResult:
    due_date: datetime | None = None
    error: FieldError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def absent(self) -> bool:
        return self.ok and self.due_date is None


def _fail(message: str) -> DatePartsResult:
    return DatePartsResult(error=FieldError(text=message, href=DUE_DATE_ANCHOR))


def _to_int(raw: str) -> int | None:
    return int(raw) if _DIGITS.fullmatch(raw) else None


def parse_due_date(
    day: str | None,
    month: str | None,
    year: str | None,
    *,
    today: date | None = None,
    min_year: int = MIN_YEAR,
) -> DatePartsResult:
    """
    Turn (day, month, year) into the start of that day, or a field error.

    Checks run in a fixed order and stop at the first failure:
    all blank -> no date; some blank -> incomplete; not numbers or out of
    range -> invalid; not a real calendar day -> invalid; not strictly after
    today -> must be in the future.

    The returned timestamp is local midnight expressed in UTC.
    """
    parts = [(p or "").strip(WHITESPACE) for p in (day, month, year)]

    if not any(parts):
        return DatePartsResult()
    if not all(parts):
        return _fail(INCOMPLETE_DATE)

    d, m, y = (_to_int(p) for p in parts)
    if d is None or m is None or y is None:
        return _fail(INVALID_DATE)
    if not (1 <= d <= 31) or not (1 <= m <= 12) or y < min_year:
        return _fail(INVALID_DATE)

    # date() refuses day overflow (31 February) instead of rolling into March.
    try:
        candidate = date(y, m, d)
    except ValueError:
        return _fail(INVALID_DATE)

    today = today or date.today()
    if candidate <= today:
        return _fail(PAST_DATE)

    local_midnight = datetime(candidate.year, candidate.month, candidate.day).astimezone()
    return DatePartsResult(due_date=local_midnight.astimezone(timezone.utc))
