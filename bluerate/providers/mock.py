"""Mock provider implementation for testing and local development."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from bluerate.utils.datetime import utc_now

from .base import BaseRateProvider
from .schemas import Rate

LATEST_VALUE_SELL = Decimal("1285.50")
HISTORICAL_BASE_VALUE = Decimal("1000.00")
HISTORICAL_EPOCH = date(2024, 1, 1)


class MockRateProvider(BaseRateProvider):
    """Deterministic provider returning synthetic blue dollar quotes."""

    name = "mock"
    display_name = "Mock Provider"

    def get_latest(self) -> Rate:
        return Rate(value_sell=LATEST_VALUE_SELL, date=utc_now().isoformat())

    def get_historical(self, day: date) -> Rate:
        # One peso per day away from the epoch, never below 1 ARS.
        offset = Decimal((day - HISTORICAL_EPOCH).days)
        value = max(HISTORICAL_BASE_VALUE + offset, Decimal("1"))
        return Rate(value_sell=value, date=day.isoformat())
