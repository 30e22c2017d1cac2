from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..core.exceptions import ValidationError

_FORM_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M",
)


def now_local() -> datetime:
    """Wall-clock time of the lab; services take `now=` so tests can pin it."""
    return datetime.now()


def parse_form_datetime(value: Optional[str], field_name: str) -> Optional[datetime]:
    """Parse a date-time typed into an edit form; blank means "not set"."""
    if value is None or not value.strip():
        return None
    value = value.strip()
    for fmt in _FORM_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    raise ValidationError(f"Invalid {field_name}.")


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600


def format_hours(hours: float) -> str:
    """Hours rounded to one decimal, as shown in sign-out confirmations."""
    return str(round(hours, 1))
