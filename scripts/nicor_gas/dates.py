"""Calendar helpers for month enumeration and candidate bill dates."""
from datetime import date, timedelta
from typing import Iterator


def month_start(d: date) -> date:
    return d.replace(day=1)


def each_month_of_interval(start: date, end: date) -> Iterator[date]:
    """
    Yield the first day of every month from start's month through end's month.

    Yields nothing if end falls in a month before start.
    """
    current = month_start(start)
    last = month_start(end)
    while current <= last:
        yield current
        if current.month == 12:
            current = current.replace(year=current.year + 1, month=1)
        else:
            current = current.replace(month=current.month + 1)


def candidate_date(month: date, day: int) -> date:
    """
    Date for a day number within month, rolling over like a calendar does.

    Day 0 is the last day of the previous month and days past the end of
    the month spill into the next one (April 31 -> May 1).
    """
    return month_start(month) + timedelta(days=day - 1)


def parse_month(value: str) -> date:
    """Parse "YYYY-MM" (or a full "YYYY-MM-DD") into the first of that month."""
    parts = value.strip().split("-")
    if len(parts) not in (2, 3):
        raise ValueError(f"Expected YYYY-MM, got {value!r}")
    return date(int(parts[0]), int(parts[1]), 1)
