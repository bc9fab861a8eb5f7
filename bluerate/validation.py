"""Validation helpers for request parameters."""

from __future__ import annotations

import re
from datetime import date

from bluerate.errors import ValidationError
from bluerate.utils.datetime import TODAY_TOKEN

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

MISSING_DATE_MESSAGE = "Date parameter is required"
INVALID_DATE_MESSAGE = "Date must be 'today' or a calendar date in YYYY-MM-DD format"


def validate_date_param(value: str | None) -> str:
    """Return ``today`` or a canonical ISO calendar date string.

    Raises:
        ValidationError: If the value is missing, blank, or not a real date.
    """

    if value is None or not str(value).strip():
        raise ValidationError(MISSING_DATE_MESSAGE)

    candidate = str(value).strip()
    if candidate.lower() == TODAY_TOKEN:
        return TODAY_TOKEN

    if not ISO_DATE_PATTERN.match(candidate):
        raise ValidationError(INVALID_DATE_MESSAGE)
    try:
        return date.fromisoformat(candidate).isoformat()
    except ValueError as exc:
        raise ValidationError(INVALID_DATE_MESSAGE) from exc
