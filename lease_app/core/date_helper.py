from datetime import date, datetime, timedelta
from typing import Optional, Union

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

DateLike = Union[date, datetime, str, None]

DEFAULT_CONTRACT_MONTHS = 6


def parse_iso_date(value: DateLike) -> Optional[date]:
    """Read a calendar date from a `date`, a `datetime` or an ISO string.

    Backend timestamps such as ``2024-01-01T00:00:00.000000Z`` are cut down
    to their date part. Anything unreadable yields ``None``.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return isoparse(value.strip()).date()
    except (ValueError, OverflowError):
        return None


def to_iso(value: DateLike) -> str:
    parsed = parse_iso_date(value)
    return parsed.isoformat() if parsed else ""


def today_iso(as_of: DateLike = None) -> str:
    return to_iso(as_of) or date.today().isoformat()


def month_of(value: DateLike) -> str:
    """``YYYY-MM`` period of a date, ``""`` when the date is unreadable."""
    iso = to_iso(value)
    return iso[:7]


def _positive_months(value) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            return None
    if not isinstance(value, int) or value < 1:
        return None
    return value


def compute_end_date(start_date: DateLike, number_of_months) -> str:
    """Last day of a lease of ``number_of_months`` months starting on ``start_date``.

    Both boundary days belong to the tenant, so a six month lease from
    2024-01-01 ends on 2024-06-30. Month ends are clamped (Jan 31 + 1 month
    is the last day of February). Returns ``""`` while either input is
    missing or invalid.
    """
    start = parse_iso_date(start_date)
    months = _positive_months(number_of_months)
    if start is None or months is None:
        return ""

    end = start + relativedelta(months=months) - timedelta(days=1)
    return end.isoformat()


def compute_months_between(
    start_date: DateLike,
    end_date: DateLike,
    default: int = DEFAULT_CONTRACT_MONTHS,
) -> int:
    """Number of months covered by the inclusive period ``start_date..end_date``.

    Inverse of :func:`compute_end_date`. A trailing part month counts as a
    whole one. Returns ``default`` when a date is missing, invalid, or the
    end falls before the start.
    """
    start = parse_iso_date(start_date)
    end = parse_iso_date(end_date)
    if start is None or end is None or end < start:
        return default

    day_after = end + timedelta(days=1)
    months = (day_after.year - start.year) * 12 + (day_after.month - start.month)
    if day_after.day > start.day:
        months += 1

    return months if months >= 1 else default
