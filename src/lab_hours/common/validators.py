from __future__ import annotations

import re
from typing import Optional

from ..core.constants import PHONE_NUMBER_DIGITS
from ..core.exceptions import ValidationError

_NON_DIGITS = re.compile(r"[^\d]")


def require_non_empty(value: Optional[str], message: str) -> str:
    if not value or not value.strip():
        raise ValidationError(message)
    return value.strip()


def normalize_phone_number(value: Optional[str]) -> Optional[str]:
    """Strip non-digits and keep the last 10 digits.

    Returns None when fewer than 10 digits remain, e.g. "(555) 123-4567" ->
    "5551234567" and "+1 555 123 4567" -> "5551234567".
    """
    digits = _NON_DIGITS.sub("", value or "")
    if len(digits) < PHONE_NUMBER_DIGITS:
        return None
    return digits[-PHONE_NUMBER_DIGITS:]


def parse_id(value: Optional[str]) -> Optional[int]:
    """Parse a numeric identifier from a form field or URL segment."""
    if value is None:
        return None
    value = str(value).strip()
    if not value.isdigit():
        return None
    return int(value)
