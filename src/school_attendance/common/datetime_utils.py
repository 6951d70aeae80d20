from __future__ import annotations

import calendar
import re
from datetime import date, datetime

from ..core.exceptions import ValidationError

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_MONTH_RE = re.compile(r"^\d{4}-\d{2}$")


def parse_iso_date(value) -> date:
    """Parse a YYYY-MM-DD string into a date, rejecting impossible dates."""
    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise ValidationError("Invalid date format or value. Use YYYY-MM-DD")
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError("Invalid date format or value. Use YYYY-MM-DD")


def parse_month(value) -> date:
    """Parse YYYY-MM into the first day of that month."""
    if not isinstance(value, str) or not _MONTH_RE.match(value):
        raise ValidationError("Invalid month format. Use YYYY-MM")
    try:
        return datetime.strptime(value + "-01", "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError("Invalid month format. Use YYYY-MM")


def month_bounds(day: date) -> tuple[date, date]:
    """First and last day of the month containing `day`."""
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last)


def format_month(day: date) -> str:
    return day.strftime("%Y-%m")


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch it.
    """
    return datetime.now().date()
