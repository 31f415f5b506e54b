"""Date arithmetic helpers shared by the generators and the analytics windows."""

from datetime import date, timedelta


def workdays_between(start: date, end: date) -> int:
    """Count business days in [start, end)."""
    if start >= end:
        return 0

    full_weeks, remainder = divmod((end - start).days, 7)
    days = full_weeks * 5
    current = start + timedelta(days=full_weeks * 7)
    for _ in range(remainder):
        if current.weekday() < 5:  # Mon-Fri
            days += 1
        current += timedelta(days=1)

    return days


def years_between(start: date, end: date) -> float:
    """Fractional years elapsed from start to end."""
    return (end - start).days / 365.25
