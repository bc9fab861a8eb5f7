"""Shared datetime helpers for enforcing UTC awareness."""

from __future__ import annotations

from datetime import UTC, date, datetime

TODAY_TOKEN = "today"


def ensure_utc(value: datetime) -> datetime:
    """Return a timezone-aware datetime in UTC."""

    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def utc_now() -> datetime:
    """Return the current UTC datetime."""

    return datetime.now(UTC)


def utc_today(now: datetime | None = None) -> date:
    """Return the UTC calendar date for ``now`` (defaults to the current instant)."""

    return ensure_utc(now if now is not None else utc_now()).date()
