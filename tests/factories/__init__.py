"""Helper factories and fakes for building domain objects in tests."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
from decimal import Decimal

from bluerate.providers.base import BaseRateProvider, UpstreamError
from bluerate.providers.schemas import Rate

FIXED_NOW = datetime(2025, 1, 15, 10, 0, tzinfo=UTC)


def make_rate(value: Decimal | str = "910.0", rate_date: str = "2024-06-01") -> Rate:
    """Return a Rate with sensible historical defaults."""

    return Rate(value_sell=Decimal(str(value)), date=rate_date)


class FakeClock:
    """Callable clock whose time only moves when told to."""

    def __init__(self, start: datetime = FIXED_NOW) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


class FakeProvider(BaseRateProvider):
    """In-memory provider that records every upstream call."""

    name = "fake"
    display_name = "Fake Provider"

    def __init__(self) -> None:
        self.latest: Rate | Exception = make_rate("1285.5", "2025-01-15T10:00:00Z")
        self.historical: dict[date, Rate | Exception] = {}
        self.latest_calls = 0
        self.historical_calls: list[date] = []

    def get_latest(self) -> Rate:
        self.latest_calls += 1
        if isinstance(self.latest, Exception):
            raise self.latest
        return self.latest

    def get_historical(self, day: date) -> Rate:
        self.historical_calls.append(day)
        result = self.historical.get(day)
        if result is None:
            raise UpstreamError(f"No fake quote for {day}", status_code=404)
        if isinstance(result, Exception):
            raise result
        return result
