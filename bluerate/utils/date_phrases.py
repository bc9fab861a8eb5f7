"""Resolve short natural-language date phrases to calendar dates."""

from __future__ import annotations

import re
from datetime import date, datetime

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from bluerate.utils.datetime import TODAY_TOKEN

_UNIT_DELTAS = {
    "day": lambda n: relativedelta(days=n),
    "week": lambda n: relativedelta(weeks=n),
    "month": lambda n: relativedelta(months=n),
    "year": lambda n: relativedelta(years=n),
}

_AGO_PATTERN = re.compile(r"^(?P<count>\d+|an?|one) (?P<unit>day|week|month|year)s? ago$")
_LAST_PATTERN = re.compile(r"^last (?P<unit>week|month|year)$")
_ISO_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class DatePhraseError(ValueError):
    """Raised when a phrase cannot be mapped to a calendar date."""


def resolve_date_phrase(phrase: str, today: date) -> str:
    """Map ``phrase`` to ``today`` or an ISO calendar date relative to ``today``.

    The literal ``today`` is kept as a token so callers get the live quote;
    every other match is rendered as ``YYYY-MM-DD``. Rules are tried in order
    and the first match wins.
    """

    normalized = " ".join(str(phrase or "").lower().split())
    if not normalized:
        raise DatePhraseError("Please enter a date")

    if normalized in {TODAY_TOKEN, "now"}:
        return TODAY_TOKEN
    if normalized == "yesterday":
        return (today - relativedelta(days=1)).isoformat()
    if normalized == "day before yesterday":
        return (today - relativedelta(days=2)).isoformat()

    match = _AGO_PATTERN.match(normalized)
    if match:
        count_raw = match.group("count")
        count = int(count_raw) if count_raw.isdigit() else 1
        return (today - _UNIT_DELTAS[match.group("unit")](count)).isoformat()

    match = _LAST_PATTERN.match(normalized)
    if match:
        return (today - _UNIT_DELTAS[match.group("unit")](1)).isoformat()

    if _ISO_PATTERN.match(normalized):
        try:
            return date.fromisoformat(normalized).isoformat()
        except ValueError as exc:
            raise DatePhraseError(f"'{phrase}' is not a valid calendar date") from exc

    default = datetime(today.year, today.month, today.day)
    try:
        parsed = date_parser.parse(normalized, default=default)
    except (ValueError, OverflowError) as exc:
        raise DatePhraseError(
            f"Could not parse the date '{phrase}'. Please try a different format."
        ) from exc
    return parsed.date().isoformat()
