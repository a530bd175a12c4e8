"""Chart series: trailing calendar buckets of net earnings."""

from datetime import datetime, timedelta
from typing import Iterable, Optional

from .calculations import compute_net
from .dates import add_months, is_same_day, start_of_day, start_of_month, start_of_week
from .formatting import day_label, headline_caption, month_label, week_label
from .models import ChartBucket, Period, PeriodHeadline, Shift

DEFAULT_LENGTHS = {
    Period.DAY: 7,
    Period.WEEK: 4,
    Period.MONTH: 6,
}


def _bucket_anchors(period: Period, today: datetime, length: int) -> list[datetime]:
    """Bucket anchors, oldest first, the newest one containing ``today``."""
    if period is Period.DAY:
        base = start_of_day(today)
        anchors = [base - timedelta(days=i) for i in range(length)]
    elif period is Period.WEEK:
        base = start_of_week(today)
        anchors = [base - timedelta(days=7 * i) for i in range(length)]
    else:
        anchors = [add_months(today, -i) for i in range(length)]
    anchors.reverse()
    return anchors


def _label(period: Period, anchor: datetime) -> str:
    if period is Period.DAY:
        return day_label(anchor)
    if period is Period.WEEK:
        return week_label(anchor)
    return month_label(anchor)


def _shift_anchor(period: Period, shift: Shift) -> datetime:
    if period is Period.DAY:
        return start_of_day(shift.date)
    if period is Period.WEEK:
        return start_of_week(shift.date)
    return start_of_month(shift.date)


def build_series(
    shifts: Iterable[Shift],
    period: Period,
    today: datetime,
    length: Optional[int] = None,
) -> list[ChartBucket]:
    """Net earnings per bucket for the trailing ``length`` periods.

    Buckets are pre-zeroed and ordered oldest to newest. Shifts falling
    outside the window are ignored. Nothing is cached between calls.
    """
    period = Period(period)
    if length is None:
        length = DEFAULT_LENGTHS[period]
    if length < 1:
        raise ValueError(f"Series length must be positive, got {length}")

    anchors = _bucket_anchors(period, today, length)
    totals = [0.0] * length
    index = {anchor: i for i, anchor in enumerate(anchors)}

    for shift in shifts:
        # Day anchors sit at midnight, so this is a same-day match.
        slot = index.get(_shift_anchor(period, shift))
        if slot is not None:
            totals[slot] += compute_net(shift)

    return [
        ChartBucket(bucket_start=anchor, net=total, label=_label(period, anchor))
        for anchor, total in zip(anchors, totals)
    ]


def period_headline(
    shifts: Iterable[Shift],
    period: Period,
    today: datetime,
) -> PeriodHeadline:
    """Figure shown above the chart.

    For days this is today's net and shift count; for weeks and months
    it is the net of the current (newest) bucket.
    """
    period = Period(period)
    shifts = list(shifts)

    if period is Period.DAY:
        todays = [shift for shift in shifts if is_same_day(shift.date, today)]
        net = 0.0
        for shift in todays:
            net += compute_net(shift)
        count = len(todays)
    else:
        series = build_series(shifts, period, today)
        net = series[-1].net
        anchor = series[-1].bucket_start
        count = sum(1 for shift in shifts if _shift_anchor(period, shift) == anchor)

    return PeriodHeadline(
        period=period,
        net=net,
        shift_count=count,
        caption=headline_caption(period, count),
    )
