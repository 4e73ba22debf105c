"""Calendar helpers for the quarterly compounding cycle."""

from datetime import date, timedelta

# (month, last day) of each calendar quarter
QUARTER_ENDS = ((3, 31), (6, 30), (9, 30), (12, 31))


def is_leap(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_year(year: int) -> int:
    return 366 if is_leap(year) else 365


def quarter_end(d: date) -> date:
    """Last day of the calendar quarter containing ``d``."""
    month, day = QUARTER_ENDS[(d.month - 1) // 3]
    return date(d.year, month, day)


def next_quarter_end(d: date) -> date:
    """Quarter end after the one closing the quarter of ``d``."""
    return quarter_end(quarter_end(d) + timedelta(days=1))


def is_quarter_end(d: date) -> bool:
    return quarter_end(d) == d


def iter_quarter_ends(first: date, last: date):
    """Yield every quarter end ``q`` with ``first <= q <= last``."""
    q = quarter_end(first)
    while q <= last:
        yield q
        q = next_quarter_end(q)


def quarter_label(d: date) -> str:
    return f"Q{(d.month - 1) // 3 + 1} {d.year}"
