"""Period and comparison windows, evolution slices."""

from datetime import date

import pytest

from phase2_analytics.schema import FilterOptions
from phase2_analytics.windows import (
    Window, comparison_window, evolution_slices, period_window,
)

REF = date(2024, 6, 28)


class TestPeriodWindow:

    @pytest.mark.parametrize("period, days", [
        ("week", 7), ("month", 30), ("quarter", 91), ("year", 365),
    ])
    def test_lengths_end_on_reference_date(self, period, days):
        window = period_window(FilterOptions(period=period), REF)
        assert window.end == REF
        assert window.days == days

    def test_custom_period(self):
        filters = FilterOptions(period="custom", start_date=date(2024, 1, 1), end_date=date(2024, 1, 31))
        assert period_window(filters, REF) == Window(date(2024, 1, 1), date(2024, 1, 31))

    def test_custom_period_reversed_dates_are_swapped(self):
        filters = FilterOptions(period="custom", start_date=date(2024, 1, 31), end_date=date(2024, 1, 1))
        assert period_window(filters, REF) == Window(date(2024, 1, 1), date(2024, 1, 31))

    def test_custom_period_without_bounds_falls_back_to_year(self):
        filters = FilterOptions(period="custom", start_date=date(2024, 1, 1))
        assert period_window(filters, REF).days == 365


class TestComparisonWindow:

    def test_previous_is_adjacent(self):
        window = period_window(FilterOptions(period="month"), REF)
        prior = comparison_window(window, "previous")
        assert prior.days == window.days
        assert (window.start - prior.end).days == 1

    def test_year_ago(self):
        window = period_window(FilterOptions(period="week"), REF)
        prior = comparison_window(window, "year-ago")
        assert (window.end - prior.end).days == 365

    def test_no_comparison(self):
        window = period_window(FilterOptions(), REF)
        assert comparison_window(window, None) is None


class TestEvolutionSlices:

    @pytest.mark.parametrize("period, count", [
        ("week", 6), ("month", 4), ("quarter", 3), ("year", 12),
    ])
    def test_slice_counts(self, period, count):
        filters = FilterOptions(period=period)
        assert len(evolution_slices(filters, period_window(filters, REF))) == count

    def test_year_labels_are_months_ending_with_reference_month(self):
        filters = FilterOptions(period="year")
        labels = [label for label, _ in evolution_slices(filters, period_window(filters, REF))]
        assert labels[-1] == "juin"
        assert labels[0] == "juil."
        assert len(set(labels)) == 12

    def test_month_labels(self):
        filters = FilterOptions(period="month")
        labels = [label for label, _ in evolution_slices(filters, period_window(filters, REF))]
        assert labels == ["S1", "S2", "S3", "S4"]

    def test_slices_stay_inside_window(self):
        filters = FilterOptions(period="week")
        window = period_window(filters, REF)
        for _, piece in evolution_slices(filters, window):
            assert window.start <= piece.start <= piece.end <= window.end

    def test_equal_slices_cover_window(self):
        filters = FilterOptions(period="custom", start_date=date(2024, 1, 1), end_date=date(2024, 2, 29))
        window = period_window(filters, REF)
        pieces = [w for _, w in evolution_slices(filters, window)]
        assert pieces[0].start == window.start
        assert pieces[-1].end == window.end
        assert sum(p.days for p in pieces) == window.days

    @pytest.mark.parametrize("period", ["quarter", "year"])
    def test_month_slices_cover_window(self, period):
        filters = FilterOptions(period=period)
        window = period_window(filters, REF)
        pieces = [w for _, w in evolution_slices(filters, window)]
        assert pieces[0].start == window.start
        assert pieces[-1].end == window.end
        assert sum(p.days for p in pieces) == window.days

    def test_quarter_leading_days_fold_into_first_month(self):
        filters = FilterOptions(period="quarter")
        label, first = evolution_slices(filters, period_window(filters, REF))[0]
        assert label == "avr."
        assert first == Window(date(2024, 3, 30), date(2024, 4, 30))
