"""Shift earnings ledger: per-shift net figures and calendar-period summaries."""

__version__ = "0.1.0"

from .aggregation import period_report, shifts_in_period, summarize
from .calculations import compute_net
from .charts import build_series, period_headline
from .models import ChartBucket, Fine, Period, PeriodReport, PeriodSummary, Shift

__all__ = [
    'ChartBucket',
    'Fine',
    'Period',
    'PeriodReport',
    'PeriodSummary',
    'Shift',
    'build_series',
    'compute_net',
    'period_headline',
    'period_report',
    'shifts_in_period',
    'summarize',
]
