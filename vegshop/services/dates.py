"""Calendar helpers for daily stock records.

Dates are plain ``YYYY-MM-DD`` strings in the server's local calendar; the
string doubles as the primary key of a daily stock record.
"""

import re
from datetime import date, timedelta
from typing import Any, Optional

DATE_RE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")
PREVIOUS_DAY_ALIAS = "previous-day"
INVALID_DATE_MESSAGE = "Invalid date format: Use YYYY-MM-DD"


def today() -> str:
    return date.today().isoformat()


def previous_day(reference: Optional[str] = None) -> str:
    """Return the day before ``reference`` (default: today)."""
    base = date.fromisoformat(reference) if reference else date.today()
    return (base - timedelta(days=1)).isoformat()


def is_valid_date(value: Any) -> bool:
    """True for an exact ``YYYY-MM-DD`` string naming a real calendar day."""
    if not isinstance(value, str) or not DATE_RE.match(value):
        return False
    try:
        parsed = date.fromisoformat(value)
    except ValueError:
        return False
    return parsed.isoformat() == value


def resolve_date_param(value: str) -> Optional[str]:
    """Map a route parameter to a concrete date, or None if it is not one."""
    if value == PREVIOUS_DAY_ALIAS:
        return previous_day()
    if is_valid_date(value):
        return value
    return None
