"""Unit tests for period summaries and the period detail report."""

from datetime import datetime

import pytest

from shiftbook.aggregation import period_report, shifts_in_period, summarize
from shiftbook.calculations import compute_net
from shiftbook.dates import is_same_day
from shiftbook.models import Fine, Period, PeriodSummary
from tests.fixtures.shifts import SAMPLE_NETS, WORKED_EXAMPLE, make_shift


class TestSummarize:

    def test_empty_input_is_all_zero(self, wednesday):
        for period in Period:
            assert summarize([], period, wednesday) == PeriodSummary()

    def test_day_equals_sum_of_same_day_nets(self, wednesday):
        shifts = [
            make_shift(datetime(2024, 5, 8, 0, 0), 100.0),
            make_shift(datetime(2024, 5, 8, 23, 59, 59, 999999), 200.0),
            make_shift(datetime(2024, 5, 7, 23, 59), 400.0),
            make_shift(datetime(2024, 5, 9, 0, 0), 800.0),
        ]
        expected = sum(compute_net(s) for s in shifts if is_same_day(s.date, wednesday))
        assert summarize(shifts, Period.DAY, wednesday).net == expected == 300

    def test_week_includes_sunday_excludes_next_monday(self, wednesday):
        shifts = [
            make_shift(datetime(2024, 5, 6), 1.0),            # Monday
            make_shift(datetime(2024, 5, 12, 22, 0), 10.0),   # Sunday
            make_shift(datetime(2024, 5, 13), 100.0),         # next Monday
            make_shift(datetime(2024, 5, 5, 12, 0), 1000.0),  # previous Sunday
        ]
        assert summarize(shifts, Period.WEEK, wednesday).net == 11

    def test_month_window(self, sample_shifts, wednesday):
        summary = summarize(sample_shifts, Period.MONTH, wednesday)
        assert summary.net == SAMPLE_NETS[0] + SAMPLE_NETS[1]

    def test_all_fields(self, sample_shifts, wednesday):
        summary = summarize(sample_shifts, Period.WEEK, wednesday)
        assert summary == PeriodSummary(
            gross=4200 + 800 + 3000 + 500,
            net=1400 + 2140,
            km=210 + 200,
            range_change=230 + 230,
            fuel_cost=900 + 700,
            commissions=750 + 520,
            fines=500,
            tax=200 + 140,
        )

    def test_worked_example_totals(self):
        summary = summarize([WORKED_EXAMPLE], Period.DAY, WORKED_EXAMPLE.date)
        assert summary.gross == 1200
        assert summary.net == 590
        assert summary.km == 180
        assert summary.range_change == 250
        assert summary.commissions == 150
        assert summary.fines == 100
        assert summary.tax == 40

    def test_negative_distance_flows_into_totals(self, wednesday):
        shifts = [
            make_shift(wednesday, 0.0, odometer_start=1000, odometer_end=900),
            make_shift(wednesday, 0.0, id="b", odometer_start=900, odometer_end=950),
        ]
        assert summarize(shifts, Period.DAY, wednesday).km == -50

    def test_idempotent(self, sample_shifts, wednesday):
        first = summarize(sample_shifts, Period.MONTH, wednesday)
        second = summarize(sample_shifts, Period.MONTH, wednesday)
        assert first.model_dump() == second.model_dump()

    def test_left_to_right_accumulation(self, wednesday):
        values = [0.1, 0.2, 0.3, 1e16, -1e16]
        shifts = [make_shift(wednesday, v, id=str(i)) for i, v in enumerate(values)]
        expected = 0.0
        for v in values:
            expected += v
        assert summarize(shifts, Period.DAY, wednesday).net == expected

    def test_accepts_generator(self, sample_shifts, wednesday):
        summary = summarize((s for s in sample_shifts), Period.MONTH, wednesday)
        assert summary.net == pytest.approx(3540)


class TestShiftsInPeriod:

    def test_keeps_input_order(self, sample_shifts):
        selected = shifts_in_period(sample_shifts, Period.WEEK, datetime(2024, 5, 10))
        assert [s.id for s in selected] == [sample_shifts[0].id, sample_shifts[1].id]

    def test_previous_month(self, sample_shifts):
        selected = shifts_in_period(sample_shifts, Period.MONTH, datetime(2024, 4, 1))
        assert [s.id for s in selected] == [sample_shifts[2].id]


class TestPeriodReport:

    def test_day_report(self, sample_shifts):
        report = period_report(sample_shifts, Period.DAY, datetime(2024, 5, 8, 9, 0))
        assert report.title == "Сводка за день"
        assert report.header == "8 мая"
        assert report.start == datetime(2024, 5, 8)
        assert len(report.shifts) == 1
        assert report.summary.net == 1400

    def test_week_report_header(self, sample_shifts):
        report = period_report(sample_shifts, Period.WEEK, datetime(2024, 5, 1))
        assert report.header == "29 апр. - 5 мая"
        assert [s.id for s in report.shifts] == [sample_shifts[2].id]

    def test_month_report_header(self, sample_shifts):
        report = period_report(sample_shifts, "month", datetime(2024, 5, 20))
        assert report.period is Period.MONTH
        assert report.header == "май 2024 г."
        assert report.summary.fines == 500

    def test_empty_period(self):
        report = period_report([], Period.WEEK, datetime(2024, 5, 8))
        assert report.shifts == []
        assert report.summary == PeriodSummary()

    def test_fines_summed_across_shifts(self, wednesday):
        shifts = [
            make_shift(wednesday, 0.0, id="a", fines=[Fine(amount=10), Fine(amount=5)]),
            make_shift(wednesday, 0.0, id="b", fines=[Fine(amount=20)]),
        ]
        assert period_report(shifts, Period.DAY, wednesday).summary.fines == 35
