"""Period window calculator - recurring budget windows anchored at a start date"""

from datetime import datetime, timedelta
from typing import Union
from household_ledger.domain.models import Period, Window
from household_ledger.utils.date_utils import add_months, months_between

_FIXED_LENGTHS = {
    Period.DAILY: timedelta(days=1),
    Period.WEEKLY: timedelta(days=7),
}

_CALENDAR_MONTHS = {
    Period.MONTHLY: 1,
    Period.YEARLY: 12,
}


def add_period(anchor: datetime, period: Union[Period, str], count: int) -> datetime:
    """
    Start of the window `count` periods after the anchor.

    Calendar periods are always offset from the anchor itself rather than
    from the previous window, so a monthly anchor on the 31st lands on Feb 28
    and then returns to Mar 31 instead of drifting to the 28th for good.
    """
    period = Period.parse(period)
    if period in _FIXED_LENGTHS:
        return anchor + _FIXED_LENGTHS[period] * count
    return add_months(anchor, _CALENDAR_MONTHS[period] * count)


def window_at(period: Union[Period, str], anchor: datetime, index: int) -> Window:
    """The index-th window of a recurrence (index 0 starts at the anchor)"""
    return Window(
        start=add_period(anchor, period, index),
        end=add_period(anchor, period, index + 1),
    )


def _estimate_index(period: Period, anchor: datetime, as_of: datetime) -> int:
    if period in _FIXED_LENGTHS:
        return (as_of - anchor) // _FIXED_LENGTHS[period]
    return months_between(anchor, as_of) // _CALENDAR_MONTHS[period]


def window_containing(period: Union[Period, str], anchor: datetime, as_of: datetime) -> Window:
    """
    Compute the half-open window [start, end) of a recurrence that contains as_of.

    Windows tile the timeline from the anchor: window(n).end == window(n+1).start.
    When as_of precedes the anchor the first window is returned; the budget
    has not started accruing yet.

    Raises:
        InvalidPeriodError: period is not a known recurrence tag
    """
    period = Period.parse(period)
    if as_of < anchor:
        return window_at(period, anchor, 0)

    # Arithmetic estimate, then correct for time-of-day and day clamping
    index = max(_estimate_index(period, anchor, as_of), 0)
    while index > 0 and add_period(anchor, period, index) > as_of:
        index -= 1
    while add_period(anchor, period, index + 1) <= as_of:
        index += 1

    return window_at(period, anchor, index)
