"""Shared helpers for the community and volunteer registries."""

from datetime import datetime, timezone


def period_bounds(year: int, month: int | None = None) -> tuple[datetime, datetime]:
    """[start, end) of a calendar year, or of one month of it, in UTC."""
    if month is None:
        start = datetime(year, 1, 1, tzinfo=timezone.utc)
        end = datetime(year + 1, 1, 1, tzinfo=timezone.utc)
    else:
        start = datetime(year, month, 1, tzinfo=timezone.utc)
        end = (
            datetime(year + 1, 1, 1, tzinfo=timezone.utc)
            if month == 12
            else datetime(year, month + 1, 1, tzinfo=timezone.utc)
        )
    return start, end


def apply_period_filter(query, column, year: int | None, month: int | None):
    """Restrict column to a year (and month). A month without a year is ignored."""
    if year is None:
        return query
    start, end = period_bounds(year, month)
    return query.filter(column >= start, column < end)


def null_required_fields(changes: dict, required: set[str]) -> list[str]:
    """Sorted names of required fields a partial update tries to set to null."""
    return sorted(f for f, v in changes.items() if v is None and f in required)
