"""Period summaries over a shift collection."""

from datetime import datetime
from typing import Iterable

from .calculations import compute_net, distance_km, fines_total, gross_earnings, range_change
from .dates import period_bounds
from .formatting import PERIOD_TITLES, period_header
from .models import Period, PeriodReport, PeriodSummary, Shift


def shifts_in_period(
    shifts: Iterable[Shift],
    period: Period,
    reference_date: datetime,
) -> list[Shift]:
    """Shifts dated inside the period around ``reference_date``, input order kept."""
    start, end = period_bounds(period, reference_date)
    return [shift for shift in shifts if start <= shift.date <= end]


def summarize_shifts(shifts: Iterable[Shift]) -> PeriodSummary:
    """Fold shifts into totals in a single left-to-right pass."""
    gross = net = km = range_total = fuel = commissions = fines = tax = 0.0

    for shift in shifts:
        gross += gross_earnings(shift)
        net += compute_net(shift)
        km += distance_km(shift)
        range_total += range_change(shift)
        fuel += shift.fuel_cost
        commissions += shift.yandex_commission + shift.park_commission
        fines += fines_total(shift)
        tax += shift.self_employed_tax

    return PeriodSummary(
        gross=gross,
        net=net,
        km=km,
        range_change=range_total,
        fuel_cost=fuel,
        commissions=commissions,
        fines=fines,
        tax=tax,
    )


def summarize(
    shifts: Iterable[Shift],
    period: Period,
    reference_date: datetime,
) -> PeriodSummary:
    """Totals for the day, week or month containing ``reference_date``."""
    return summarize_shifts(shifts_in_period(shifts, period, reference_date))


def period_report(
    shifts: Iterable[Shift],
    period: Period,
    reference_date: datetime,
) -> PeriodReport:
    """Everything the period detail view shows: header, totals and the shifts."""
    period = Period(period)
    start, end = period_bounds(period, reference_date)
    selected = shifts_in_period(shifts, period, reference_date)
    return PeriodReport(
        period=period,
        start=start,
        end=end,
        title=PERIOD_TITLES[period],
        header=period_header(period, reference_date),
        summary=summarize_shifts(selected),
        shifts=selected,
    )
