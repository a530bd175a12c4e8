"""Calendar boundaries for day, week and month windows.

All functions work on naive local datetimes. Weeks start on Monday.
These helpers are the only place where period edges are defined.
"""

from datetime import datetime, time, timedelta

from .models import Period


def start_of_day(d: datetime) -> datetime:
    return datetime.combine(d.date(), time.min)


def end_of_day(d: datetime) -> datetime:
    return datetime.combine(d.date(), time.max)


def start_of_week(d: datetime) -> datetime:
    """Monday of the week containing ``d``, at midnight.

    A Sunday belongs to the week that started six days earlier.
    """
    # weekday(): Monday == 0 ... Sunday == 6
    return start_of_day(d) - timedelta(days=d.weekday())


def end_of_week(d: datetime) -> datetime:
    """Sunday of the week containing ``d``, at the last instant of the day."""
    return end_of_day(start_of_week(d) + timedelta(days=6))


def start_of_month(d: datetime) -> datetime:
    return datetime(d.year, d.month, 1)


def end_of_month(d: datetime) -> datetime:
    """Last day of the month containing ``d``, at the last instant of the day."""
    # Day zero of the next month is the last day of this one.
    if d.month == 12:
        next_month = datetime(d.year + 1, 1, 1)
    else:
        next_month = datetime(d.year, d.month + 1, 1)
    return end_of_day(next_month - timedelta(days=1))


def add_months(d: datetime, months: int) -> datetime:
    """First day of the month ``months`` away from the month of ``d``."""
    index = d.year * 12 + (d.month - 1) + months
    return datetime(index // 12, index % 12 + 1, 1)


def is_same_day(a: datetime, b: datetime) -> bool:
    return a.year == b.year and a.month == b.month and a.day == b.day


def period_bounds(period: Period, d: datetime) -> tuple[datetime, datetime]:
    """Inclusive ``(start, end)`` window of ``period`` around ``d``."""
    period = Period(period)
    if period is Period.DAY:
        return start_of_day(d), end_of_day(d)
    if period is Period.WEEK:
        return start_of_week(d), end_of_week(d)
    return start_of_month(d), end_of_month(d)
