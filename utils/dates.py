"""Date helpers."""

from datetime import date, datetime, timezone


def utc_today():
    """Current calendar date in UTC (no time component)."""
    return datetime.now(timezone.utc).date()


def parse_iso_date(value):
    """Parse 'YYYY-MM-DD'. Raises ValueError on anything else."""
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip())
