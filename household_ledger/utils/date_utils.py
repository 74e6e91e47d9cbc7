"""Calendar arithmetic utilities"""

import calendar
from datetime import datetime, timezone
from typing import List, Tuple


def add_months(moment: datetime, months: int) -> datetime:
    """Add (or subtract) calendar months, clamping the day to the target month's length"""
    month = moment.month - 1 + months
    year = moment.year + month // 12
    month = month % 12 + 1
    max_day = calendar.monthrange(year, month)[1]
    return moment.replace(year=year, month=month, day=min(moment.day, max_day))


def months_between(start: datetime, end: datetime) -> int:
    """Whole calendar-month difference between the (year, month) of two instants"""
    return (end.year * 12 + end.month) - (start.year * 12 + start.month)


def trailing_months(as_of: datetime, count: int) -> List[Tuple[int, int]]:
    """(year, month) pairs for the `count` months ending with as_of's month, oldest first"""
    months = []
    y, m = as_of.year, as_of.month
    for _ in range(count):
        months.append((y, m))
        m -= 1
        if m < 1:
            m = 12
            y -= 1
    months.reverse()
    return months


def month_label(year: int, month: int) -> str:
    """Short chart label, e.g. "Jul 2023" """
    return f"{calendar.month_abbr[month]} {year}"


def to_naive_utc(moment: datetime) -> datetime:
    """Normalize an aware datetime to naive UTC; naive values are assumed UTC already"""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(timezone.utc).replace(tzinfo=None)


def utcnow() -> datetime:
    """Current time as naive UTC"""
    return datetime.now(timezone.utc).replace(tzinfo=None)
