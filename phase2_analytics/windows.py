"""Period windows: the date ranges a KPI is evaluated over."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from phase1_synthetic_data.generators.temporal import workdays_between
from phase2_analytics.schema import FilterOptions

PERIOD_DAYS = {
    "week": 7,
    "month": 30,
    "quarter": 91,
    "year": 365,
}

# Number of points on the evolution chart per period
EVOLUTION_POINTS = {
    "quarter": 3,
    "year": 12,
    "month": 4,
}
DEFAULT_EVOLUTION_POINTS = 6

MONTH_LABELS = [
    "janv.", "févr.", "mars", "avr.", "mai", "juin",
    "juil.", "août", "sept.", "oct.", "nov.", "déc.",
]


@dataclass(frozen=True)
class Window:
    """Inclusive date range [start, end]."""
    start: date
    end: date

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    @property
    def workdays(self) -> int:
        return workdays_between(self.start, self.end + timedelta(days=1))

    def contains(self, day: Optional[date]) -> bool:
        return day is not None and self.start <= day <= self.end

    def shifted(self, days: int) -> "Window":
        delta = timedelta(days=days)
        return Window(self.start - delta, self.end - delta)

    def label(self) -> str:
        return f"{self.start:%d/%m/%Y} - {self.end:%d/%m/%Y}"


def period_window(filters: FilterOptions, reference_date: date) -> Window:
    """Window selected by the filters, ending on the reference date.

    A custom period without both bounds falls back to the trailing year.
    """
    if filters.period == "custom" and filters.start_date and filters.end_date:
        start, end = filters.start_date, filters.end_date
        if start > end:
            start, end = end, start
        return Window(start, end)

    length = PERIOD_DAYS.get(filters.period, PERIOD_DAYS["year"])
    return Window(reference_date - timedelta(days=length - 1), reference_date)


def comparison_window(window: Window, compare_with: Optional[str]) -> Optional[Window]:
    """Prior window supplying trend figures, or None when no comparison applies."""
    if compare_with == "previous":
        return window.shifted(window.days)
    if compare_with == "year-ago":
        return window.shifted(365)
    return None


def _month_slices(window: Window, count: int) -> list[tuple[str, Window]]:
    """The `count` calendar months ending with the window's last month, clipped to it.

    Window days before the earliest month (30-31 March for a quarter ending
    on 28 June) are folded into the first slice, so the slices cover the
    whole window.
    """
    slices = []
    year, month = window.end.year, window.end.month
    for _ in range(count):
        first = date(year, month, 1)
        next_first = date(year + (month == 12), month % 12 + 1, 1)
        last = next_first - timedelta(days=1)
        start, end = max(first, window.start), min(last, window.end)
        if start > end:
            start = end = first
        slices.append((MONTH_LABELS[month - 1], Window(start, end)))
        year, month = (year - 1, 12) if month == 1 else (year, month - 1)

    slices.reverse()
    label, first_slice = slices[0]
    if window.start < first_slice.start:
        slices[0] = (label, Window(window.start, first_slice.end))
    return slices


def _equal_slices(window: Window, count: int) -> list[Window]:
    edges = [window.start + timedelta(days=round(i * window.days / count)) for i in range(count + 1)]
    slices = []
    for lo, hi in zip(edges, edges[1:]):
        end = max(lo, hi - timedelta(days=1))
        slices.append(Window(lo, min(end, window.end)))
    return slices


def evolution_slices(filters: FilterOptions, window: Window) -> list[tuple[str, Window]]:
    """Labelled sub-windows for the time-evolution chart.

    quarter -> 3 months, year -> 12 months, month -> 4 weeks, otherwise 6 slices.
    """
    count = EVOLUTION_POINTS.get(filters.period, DEFAULT_EVOLUTION_POINTS)
    if filters.period in ("quarter", "year"):
        return _month_slices(window, count)
    if filters.period == "month":
        return [(f"S{i + 1}", w) for i, w in enumerate(_equal_slices(window, count))]
    return [(f"{w.start:%d/%m}", w) for w in _equal_slices(window, count)]
