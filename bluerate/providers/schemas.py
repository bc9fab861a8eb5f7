"""Dataclasses describing normalized rate provider payloads."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation


@dataclass(frozen=True)
class Rate:
    """Blue dollar sell rate (ARS per USD) for a single day or the latest quote.

    ``date`` is the requested ISO calendar date for historical rates and the
    provider's ``last_update`` timestamp for the latest rate.
    """

    value_sell: Decimal
    date: str

    def __post_init__(self) -> None:
        try:
            value = Decimal(str(self.value_sell))
        except InvalidOperation as exc:
            raise ValueError(f"value_sell must be numeric, got {self.value_sell!r}") from exc
        if not value.is_finite() or value <= 0:
            raise ValueError(f"value_sell must be a positive number, got {self.value_sell!r}")
        object.__setattr__(self, "value_sell", value)
        if not self.date or not str(self.date).strip():
            raise ValueError("date must be provided for Rate")
